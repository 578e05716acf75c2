"""Command completion for the interactive shell."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

# Command definitions with descriptions
COMMANDS = {
    "config": "Store or show credentials",
    "transactions": "Enrich and list transactions",
    "account-holders": "Manage account holders",
    "reports": "Reports and metrics",
    "labels": "List labels",
    "help": "Show help",
    "clear": "Clear the screen",
    "quit": "Exit the CLI",
    "exit": "Exit the CLI",
}

SUBCOMMANDS = {
    "config": ["set", "show", "path"],
    "transactions": ["enrich", "batch", "batch-status", "get", "list"],
    "account-holders": ["create", "get", "list", "delete"],
    "reports": ["report", "metrics"],
    "labels": ["list"],
    "help": [c for c in COMMANDS if c not in ("clear", "quit", "exit", "help")],
}

COMMAND_OPTIONS = {
    "config": ["--api-key", "--access-token", "--json"],
    "transactions": [
        "--id",
        "--description",
        "--amount",
        "--date",
        "--entry-type",
        "--currency",
        "--account-holder-id",
        "--country",
        "--file",
        "--limit",
        "--cursor",
        "--json",
    ],
    "account-holders": [
        "--id",
        "--type",
        "--name",
        "--currency",
        "--country",
        "--file",
        "--limit",
        "--cursor",
        "--force",
        "--json",
    ],
    "reports": ["--period", "--json"],
    "labels": ["--json"],
}

OPTION_META = {
    "--api-key": "API key",
    "--access-token": "access token",
    "--json": "raw JSON output",
    "--id": "record ID",
    "--description": "bank description",
    "--amount": "signed amount",
    "--date": "YYYY-MM-DD",
    "--entry-type": "debit|credit",
    "--currency": "ISO 4217",
    "--account-holder-id": "account holder",
    "--country": "ISO 3166 alpha-2",
    "--file": "JSON file",
    "--limit": "page size",
    "--cursor": "page cursor",
    "--type": "consumer|business",
    "--name": "display name",
    "--force": "skip confirmation",
    "--period": "report period",
}

# Short forms accepted by the dispatcher
ALIASES = {
    "cfg": "config",
    "tx": "transactions",
    "transaction": "transactions",
    "ah": "account-holders",
    "account-holder": "account-holders",
    "holders": "account-holders",
    "rpt": "reports",
    "label": "labels",
}


class CommandCompleter(Completer):
    """Completer for command names, subcommands, flags and JSON file paths."""

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        text = document.text_before_cursor
        words = text.split()

        if not words or (len(words) == 1 and not text.endswith(" ")):
            word = words[0].lower() if words else ""
            for cmd, desc in COMMANDS.items():
                if cmd.startswith(word):
                    yield Completion(cmd, start_position=-len(word), display=cmd, display_meta=desc)
            return

        cmd = words[0].lower()
        cmd = ALIASES.get(cmd, cmd)
        current = "" if text.endswith(" ") else words[-1]

        # Second word: subcommand
        if len(words) == 1 or (len(words) == 2 and current):
            for sub in SUBCOMMANDS.get(cmd, []):
                if sub.startswith(current.lower()):
                    yield Completion(sub, start_position=-len(current), display=sub)
            return

        previous = words[-2] if current else words[-1]
        if previous == "--file":
            yield from self._complete_path(current)
            return

        for opt in COMMAND_OPTIONS.get(cmd, []):
            if opt.startswith(current.lower()) and opt not in words:
                yield Completion(
                    opt,
                    start_position=-len(current),
                    display=opt,
                    display_meta=OPTION_META.get(opt, ""),
                )

    def _complete_path(self, partial: str) -> Iterable[Completion]:
        """Complete directories and JSON files."""
        path = Path(partial).expanduser() if partial else Path(".")

        if partial and not partial.endswith("/") and not path.is_dir():
            parent, prefix = path.parent, path.name
        else:
            parent, prefix = path, ""

        if not parent.exists():
            return

        try:
            items = sorted(parent.iterdir(), key=lambda x: (not x.is_dir(), x.name.lower()))
        except PermissionError:
            return

        for item in items:
            if not item.name.startswith(prefix) or item.name.startswith("."):
                continue
            if item.is_dir():
                yield Completion(
                    str(item) + "/",
                    start_position=-len(partial),
                    display=item.name + "/",
                    display_meta="folder",
                )
            elif item.suffix.lower() == ".json":
                yield Completion(
                    str(item),
                    start_position=-len(partial),
                    display=item.name,
                    display_meta="JSON",
                )
