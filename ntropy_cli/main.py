"""Main CLI entry point - one-shot commands and an interactive REPL."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import shlex
import sys
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.styles import Style

from ntropy_cli import __version__
from ntropy_cli.commands import (
    AccountHoldersCommand,
    ConfigCommand,
    HelpCommand,
    LabelsCommand,
    ReportsCommand,
    TransactionsCommand,
)
from ntropy_cli.commands.base import BaseCommand
from ntropy_cli.core.api_client import APIClient
from ntropy_cli.core.config import CLIConfig, get_config, set_config
from ntropy_cli.core.logging_setup import configure_logging
from ntropy_cli.core.store import ConfigStore, ConfigStoreError, get_store, set_store
from ntropy_cli.ui.console import console, print_error
from ntropy_cli.ui.logo import print_logo
from ntropy_cli.utils.completions import CommandCompleter
from ntropy_cli.utils.history import CommandHistory

logger = logging.getLogger(__name__)

# Prompt styling
PROMPT_STYLE = Style.from_dict({
    "prompt": "#2EC4B6 bold",
    "completion-menu": "bg:#12202a #e8e8e8",
    "completion-menu.completion": "bg:#12202a #2ec4b6",
    "completion-menu.completion.current": "bg:#2ec4b6 #000000 bold",
    "completion-menu.meta.completion": "bg:#12202a #888888",
    "completion-menu.meta.completion.current": "bg:#2ec4b6 #1a1a1a",
})

COMMAND_CLASSES: list[type[BaseCommand]] = [
    ConfigCommand,
    TransactionsCommand,
    AccountHoldersCommand,
    ReportsCommand,
    LabelsCommand,
    HelpCommand,
]


class NtropyCLI:
    """Main CLI application."""

    def __init__(
        self,
        config: Optional[CLIConfig] = None,
        store: Optional[ConfigStore] = None,
        api: Optional[APIClient] = None,
    ):
        self.config = config or get_config()
        set_config(self.config)
        self.store = store if store is not None else get_store()
        set_store(self.store)
        self.api = api or APIClient(self.store, self.config.api_url, timeout=self.config.timeout)

        # Command registry, keyed by name and every alias
        self.commands: dict[str, BaseCommand] = {}
        for command_cls in COMMAND_CLASSES:
            command = command_cls(self.config, store=self.store, api=self.api)
            for key in [command_cls.name, *command_cls.aliases]:
                self.commands[key] = command

    def close(self) -> None:
        self.api.close()

    def dispatch(self, cmd_name: str, args: list[str]) -> bool:
        """Run one command; unknown names print an error and fail."""
        cmd_name = cmd_name.lower().lstrip("/")
        command = self.commands.get(cmd_name)
        if command is None:
            print_error(f"Unknown command: {cmd_name}")
            console.print("[muted]Type help for available commands[/muted]")
            return False

        logger.debug("Running %s %s", command.name, args)
        try:
            return command.execute(args)
        except ConfigStoreError as e:
            print_error(str(e), title="Config Error")
            return False

    def run(self) -> int:
        """Run the interactive REPL."""
        history = CommandHistory(self.config.history_file)
        session = PromptSession(
            history=history.history,
            completer=CommandCompleter(),
            style=PROMPT_STYLE,
            complete_while_typing=True,
            mouse_support=False,
        )

        console.clear()
        print_logo()
        self._show_config_status()

        while True:
            try:
                user_input = session.prompt(HTML("<prompt>ntropy ❯</prompt> ")).strip()
                if not user_input:
                    continue

                try:
                    parts = shlex.split(user_input)
                except ValueError as e:
                    print_error(f"Could not parse input: {e}")
                    continue

                cmd_name, args = parts[0].lower().lstrip("/"), parts[1:]

                if cmd_name in ("quit", "exit"):
                    console.print("[muted]Goodbye.[/muted]")
                    return 0

                if cmd_name == "clear":
                    console.clear()
                    print_logo(show_tagline=False, show_commands=False)
                    continue

                try:
                    self.dispatch(cmd_name, args)
                except KeyboardInterrupt:
                    console.print("\n[warning]Interrupted[/warning]")

                console.print()

            except KeyboardInterrupt:
                console.print("\n[muted]Type quit to exit[/muted]")
            except EOFError:
                console.print("\n[muted]Goodbye.[/muted]")
                return 0

    def _show_config_status(self) -> None:
        """Tell the user whether an API key is stored."""
        try:
            configured = self.store.is_configured()
        except ConfigStoreError as e:
            print_error(str(e), title="Config Error")
            return

        if configured:
            console.print("  [success]●[/success] API key configured")
        else:
            console.print("  [warning]○[/warning] No API key. Run [command]config set --api-key KEY[/command]")
        console.print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ntropy",
        description="Ntropy CLI - Transaction enrichment from your terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
        epilog="Run 'ntropy help' for the list of commands.",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help="API base URL (default: $NTROPY_BASE_URL or https://api.ntropy.network)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log requests to stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Ntropy CLI {__version__}",
    )
    parser.add_argument(
        "command",
        nargs="?",
        help="Command to execute (optional, starts REPL if not provided)",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point."""
    parser = build_parser()

    # Command-specific flags pass through to the command
    args, remaining = parser.parse_known_args(argv)

    config = CLIConfig.from_env()
    if args.base_url:
        config = dataclasses.replace(config, base_url=args.base_url)
    configure_logging("DEBUG" if args.verbose else config.log_level)

    cli = NtropyCLI(config)
    try:
        if args.command:
            success = cli.dispatch(args.command, remaining)
            sys.exit(0 if success else 1)

        if remaining:
            print_error(f"Unrecognized arguments: {' '.join(remaining)}")
            sys.exit(2)

        sys.exit(cli.run())
    finally:
        cli.close()


if __name__ == "__main__":
    main()
