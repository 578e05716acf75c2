"""Account holders command - create, view, list and delete account holders."""

from __future__ import annotations

from typing import Any

from rich.prompt import Confirm

from ntropy_cli.commands.base import ResourceCommand
from ntropy_cli.core.api_client import extract_items, next_cursor
from ntropy_cli.ui.console import console, print_error, print_json, print_success
from ntropy_cli.ui.panels import create_account_holder_panel, create_account_holders_table

ACCOUNT_HOLDER_FLAGS = ("id", "type", "name", "currency", "country")


class AccountHoldersCommand(ResourceCommand):
    """Manage the account holders transactions are attributed to."""

    name = "account-holders"
    description = "Create, view, list and delete account holders"
    usage = (
        "account-holders <create|get|list|delete> "
        "[--id ID --type consumer|business --name NAME --currency CUR --country CC] "
        "[--limit N] [--cursor C] [--force] [--json]"
    )
    aliases = ["ah", "account-holder", "holders"]

    subcommands = {
        "create": "_create",
        "get": "_get",
        "list": "_list",
        "delete": "_delete",
    }

    def _create(self, flags: dict[str, Any], positional: list[str]) -> bool:
        if "file" in flags:
            record = self.load_json_file(flags["file"])
            if record is None:
                return False
            if not isinstance(record, dict):
                print_error("The account holder file must hold a single JSON object.")
                return False
        else:
            record = {key: flags[key] for key in ACCOUNT_HOLDER_FLAGS if isinstance(flags.get(key), str)}
            if not record:
                print_error("No account holder given. Pass --file FILE or --id/--type flags.")
                self._print_usage()
                return False

        response = self.call("Creating account holder...", lambda: self.api.create_account_holder(record))
        if not response.success:
            return False

        if self.wants_json(flags):
            print_json(response.data)
        else:
            print_success(f"Account holder {record['id']} created" if record.get("id") else "Account holder created")
            if isinstance(response.data, dict):
                console.print(create_account_holder_panel(response.data))
        return True

    def _get(self, flags: dict[str, Any], positional: list[str]) -> bool:
        holder_id = self.positional_id(positional, "account holder ID")
        if holder_id is None:
            return False

        response = self.call(f"Fetching account holder {holder_id}...", lambda: self.api.get_account_holder(holder_id))
        if not response.success:
            return False

        self.emit(flags, response.data, lambda data: console.print(create_account_holder_panel(data or {})))
        return True

    def _list(self, flags: dict[str, Any], positional: list[str]) -> bool:
        limit = self.int_flag(flags, "limit", self.config.page_size)
        if limit is None:
            return False
        cursor = flags.get("cursor") if isinstance(flags.get("cursor"), str) else None

        response = self.call(
            "Fetching account holders...",
            lambda: self.api.list_account_holders(limit=limit, cursor=cursor),
        )
        if not response.success:
            return False

        if self.wants_json(flags):
            print_json(response.data)
            return True

        holders = extract_items(response.data, "account-holders")
        console.print()
        if not holders:
            console.print("  [muted]No account holders found.[/muted]")
            return True

        console.print(create_account_holders_table(holders))
        cursor_next = next_cursor(response.data)
        if cursor_next:
            console.print(f"\n  [muted]More results:[/muted] [command]ntropy account-holders list --cursor {cursor_next}[/command]")
        return True

    def _delete(self, flags: dict[str, Any], positional: list[str]) -> bool:
        holder_id = self.positional_id(positional, "account holder ID")
        if holder_id is None:
            return False

        force = flags.get("force", flags.get("f", False))
        if not force and console.is_terminal:
            if not Confirm.ask(
                f"[warning]Delete account holder[/warning] [id]{holder_id}[/id]?",
                console=console,
                default=False,
            ):
                console.print("[muted]Cancelled.[/muted]")
                return True

        response = self.call(f"Deleting account holder {holder_id}...", lambda: self.api.delete_account_holder(holder_id))
        if not response.success:
            return False

        if self.wants_json(flags) and response.data is not None:
            print_json(response.data)
        else:
            print_success(f"Account holder {holder_id} deleted")
        return True
