"""REPL command history."""

from __future__ import annotations

from pathlib import Path

from prompt_toolkit.history import FileHistory, History, InMemoryHistory

# Flags whose values must never reach the history file
SECRET_FLAGS = ("--api-key", "--access-token")


def redact(command: str) -> str:
    """Mask the values of secret flags in a command line."""
    parts = command.split()
    for i, part in enumerate(parts):
        for flag in SECRET_FLAGS:
            if part == flag and i + 1 < len(parts):
                parts[i + 1] = "****"
            elif part.startswith(flag + "="):
                parts[i] = f"{flag}=****"
    return " ".join(parts)


class RedactingFileHistory(FileHistory):
    """File history that masks secret flag values before writing them."""

    def store_string(self, string: str) -> None:
        super().store_string(redact(string))


class CommandHistory:
    """Command history, kept in the CLI's config directory when a file is given."""

    def __init__(self, history_file: Path | None = None):
        self.history_file = history_file

        if history_file:
            history_file.parent.mkdir(parents=True, exist_ok=True)
            self._history: History = RedactingFileHistory(str(history_file))
        else:
            self._history = InMemoryHistory()

    @property
    def history(self) -> History:
        """Get the underlying history object."""
        return self._history
