"""Help command - display CLI help and documentation."""

from __future__ import annotations

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ntropy_cli.commands.base import BaseCommand
from ntropy_cli.ui.console import console
from ntropy_cli.ui.logo import print_logo

COMMANDS = [
    {
        "name": "config",
        "aliases": "cfg",
        "description": "Store or show the API key and access token",
        "usage": "config set --api-key KEY [--access-token TOKEN]\nconfig show [--json]\nconfig path",
    },
    {
        "name": "transactions",
        "aliases": "tx, transaction",
        "description": "Enrich, batch, fetch and list transactions",
        "usage": (
            "transactions enrich --id ID --description TEXT --amount N --date YYYY-MM-DD\n"
            "    --entry-type debit|credit --currency CUR --account-holder-id ID [--country CC]\n"
            "transactions enrich --file tx.json\n"
            "transactions batch --file txs.json\n"
            "transactions batch-status <batch_id>\n"
            "transactions get <id>\n"
            "transactions list [--limit N] [--cursor C]"
        ),
    },
    {
        "name": "account-holders",
        "aliases": "ah, account-holder, holders",
        "description": "Create, view, list and delete account holders",
        "usage": (
            "account-holders create --id ID --type consumer|business [--name NAME]\n"
            "    [--currency CUR] [--country CC]\n"
            "account-holders get <id>\n"
            "account-holders list [--limit N] [--cursor C]\n"
            "account-holders delete <id> [--force]"
        ),
    },
    {
        "name": "reports",
        "aliases": "rpt",
        "description": "Show an account holder's report or metrics",
        "usage": "reports report <account_holder_id> [--period PERIOD]\nreports metrics <account_holder_id>",
    },
    {
        "name": "labels",
        "aliases": "label",
        "description": "List the labels transactions can be classified with",
        "usage": "labels [list]",
    },
    {
        "name": "help",
        "aliases": "h, ?",
        "description": "Show this help message",
        "usage": "help [command]",
    },
    {
        "name": "clear",
        "aliases": "",
        "description": "Clear the terminal screen (interactive mode)",
        "usage": "clear",
    },
    {
        "name": "quit",
        "aliases": "exit",
        "description": "Exit interactive mode",
        "usage": "quit",
    },
]


class HelpCommand(BaseCommand):
    """Display help information."""

    name = "help"
    description = "Show help information"
    usage = "help [command]"
    aliases = ["h", "?"]

    def execute(self, args: list[str]) -> bool:
        """Display help."""
        flags, remaining = self.parse_flags(args)

        if remaining:
            return self._show_command_help(remaining[0].lower().lstrip("/"))
        return self._show_general_help()

    def _show_general_help(self) -> bool:
        """Show general help with all commands."""
        print_logo(show_commands=False)

        table = Table(
            show_header=True,
            header_style="primary",
            border_style="muted",
            padding=(0, 2),
        )
        table.add_column("Command", style="command", width=17)
        table.add_column("Aliases", style="muted", width=22)
        table.add_column("Description", style="text")

        for cmd in COMMANDS:
            table.add_row(cmd["name"], cmd["aliases"], cmd["description"])

        console.print(Panel(
            table,
            title="[primary]Available Commands[/primary]",
            border_style="primary",
            padding=(1, 2),
        ))

        console.print()
        tips = Text()
        tips.append("Tips:\n", style="primary")
        tips.append("  • ", style="muted")
        tips.append("Use ", style="text")
        tips.append("help <command>", style="command")
        tips.append(" for detailed command help\n", style="text")
        tips.append("  • ", style="muted")
        tips.append("Add ", style="text")
        tips.append("--json", style="command")
        tips.append(" to any data command for raw API output\n", style="text")
        tips.append("  • ", style="muted")
        tips.append("Run ", style="text")
        tips.append("ntropy", style="command")
        tips.append(" with no arguments for interactive mode", style="text")

        console.print(tips)
        return True

    def _show_command_help(self, cmd_name: str) -> bool:
        """Show detailed help for a specific command."""
        cmd = None
        for c in COMMANDS:
            aliases = [a.strip() for a in c["aliases"].split(",") if a.strip()]
            if cmd_name == c["name"] or cmd_name in aliases:
                cmd = c
                break

        if not cmd:
            console.print(f"[error]Unknown command: {cmd_name}[/error]")
            console.print("[muted]Use help to see available commands[/muted]")
            return False

        console.print()

        text = Text()
        text.append(f"{cmd['name']}\n\n", style="primary.bold")
        text.append(f"{cmd['description']}\n\n", style="text")
        text.append("Usage:\n", style="muted")
        for line in cmd["usage"].splitlines():
            text.append(f"  {line}\n", style="command")
        if cmd["aliases"]:
            text.append("\nAliases:\n", style="muted")
            text.append(f"  {cmd['aliases']}", style="tertiary")

        console.print(Panel(
            text,
            title=f"[primary]{cmd['name']}[/primary]",
            border_style="primary",
            padding=(1, 2),
        ))
        return True
