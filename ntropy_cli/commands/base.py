"""Base command classes for CLI commands."""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Optional

from ntropy_cli.core.api_client import APIClient, APIResponse
from ntropy_cli.core.config import CLIConfig
from ntropy_cli.core.store import ConfigStore, get_store
from ntropy_cli.ui.console import console, print_error, print_json
from ntropy_cli.ui.spinners import create_spinner

logger = logging.getLogger(__name__)

# "-4.50" after a flag is a value, not another flag
_NEGATIVE_NUMBER = re.compile(r"^-\d+(\.\d+)?$")

SETUP_HINT = "Run: ntropy config set --api-key KEY"


def _is_value(arg: str) -> bool:
    return not arg.startswith("-") or bool(_NEGATIVE_NUMBER.match(arg))


class BaseCommand(ABC):
    """Base class for all CLI commands."""

    name: str = "base"
    description: str = "Base command"
    usage: str = ""
    aliases: list[str] = []

    def __init__(
        self,
        config: CLIConfig,
        store: Optional[ConfigStore] = None,
        api: Optional[APIClient] = None,
    ):
        self.config = config
        self.store = store if store is not None else get_store()
        self.api = api or APIClient(self.store, config.api_url, timeout=config.timeout)

    @abstractmethod
    def execute(self, args: list[str]) -> bool:
        """
        Execute the command.

        Args:
            args: Command arguments

        Returns:
            True if successful, False otherwise
        """
        pass

    def parse_flags(self, args: list[str]) -> tuple[dict[str, Any], list[str]]:
        """Parse command-line flags from arguments."""
        flags = {}
        remaining = []

        i = 0
        while i < len(args):
            arg = args[i]
            if arg.startswith("--"):
                key = arg[2:]
                if "=" in key:
                    key, value = key.split("=", 1)
                    flags[key] = value
                elif i + 1 < len(args) and _is_value(args[i + 1]):
                    flags[key] = args[i + 1]
                    i += 1
                else:
                    flags[key] = True
            elif arg.startswith("-") and len(arg) == 2 and not arg[1].isdigit():
                key = arg[1]
                if i + 1 < len(args) and _is_value(args[i + 1]):
                    flags[key] = args[i + 1]
                    i += 1
                else:
                    flags[key] = True
            else:
                remaining.append(arg)
            i += 1

        return flags, remaining

    def wants_json(self, flags: dict[str, Any]) -> bool:
        return bool(flags.get("json", self.config.json_output))

    def require_auth(self) -> bool:
        """Refuse to run when no API key is stored."""
        if self.store.is_configured():
            return True
        print_error(f"Not configured.\n\n{SETUP_HINT}")
        return False

    def call(self, message: str, fn: Callable[[], APIResponse], style: str = "loading") -> APIResponse:
        """Run one API call behind a spinner and report failures."""
        with create_spinner(message, style=style):
            response = fn()

        if not response.success:
            logger.debug("Request failed: kind=%s status=%s", response.kind, response.status_code)
            print_error(response.error or "Request failed")
        return response

    def int_flag(self, flags: dict[str, Any], name: str, default: int) -> Optional[int]:
        """Read an integer flag, printing an error and returning None if invalid."""
        raw = flags.get(name, default)
        try:
            value = int(raw)
        except (TypeError, ValueError):
            print_error(f"--{name} must be an integer, got: {raw}")
            return None
        if value <= 0:
            print_error(f"--{name} must be positive, got: {value}")
            return None
        return value

    def load_json_file(self, path: Any) -> Any:
        """Load a JSON payload from disk, printing an error and returning None on failure."""
        if not isinstance(path, str):
            print_error("--file needs a path to a JSON file.")
            return None
        file_path = Path(path).expanduser()
        if not file_path.is_file():
            print_error(f"File not found: {file_path}")
            return None
        try:
            return json.loads(file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            print_error(f"{file_path} is not valid JSON: {e}")
            return None


class ResourceCommand(BaseCommand):
    """A command made of subcommands, e.g. ``transactions list``.

    Subclasses map subcommand names to handler method names in
    ``subcommands``; each handler receives the parsed flags and the
    positional arguments after the subcommand.
    """

    subcommands: dict[str, str] = {}
    default_subcommand: Optional[str] = None
    requires_auth: bool = True

    def execute(self, args: list[str]) -> bool:
        flags, remaining = self.parse_flags(args)

        if remaining:
            sub, positional = remaining[0].lower(), remaining[1:]
        elif self.default_subcommand:
            sub, positional = self.default_subcommand, []
        else:
            self._print_usage()
            return False

        handler_name = self.subcommands.get(sub)
        if handler_name is None:
            print_error(f"Unknown subcommand: {self.name} {sub}")
            self._print_usage()
            return False

        if self.requires_auth and not self.require_auth():
            return False

        return getattr(self, handler_name)(flags, positional)

    def _print_usage(self) -> None:
        console.print(f"[muted]Usage:[/muted] [command]{self.usage}[/command]")
        console.print(f"[muted]Subcommands:[/muted] {', '.join(self.subcommands)}")

    def emit(self, flags: dict[str, Any], data: Any, render: Callable[[Any], None]) -> None:
        """Print ``data`` as JSON or through the given renderer."""
        if self.wants_json(flags):
            print_json(data)
        else:
            console.print()
            render(data)

    def positional_id(self, positional: list[str], what: str) -> Optional[str]:
        if not positional:
            print_error(f"Missing {what}.")
            self._print_usage()
            return None
        return positional[0]
