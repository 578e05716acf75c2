"""Transactions command - enrich, batch, fetch and list transactions."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ntropy_cli.commands.base import ResourceCommand
from ntropy_cli.core.api_client import decimal_to_number, extract_items, next_cursor
from ntropy_cli.ui.console import console, print_error, print_json, print_success
from ntropy_cli.ui.panels import (
    create_document_panel,
    create_transaction_panel,
    create_transactions_table,
)

# Command-line flag -> request field
TRANSACTION_FLAGS = {
    "id": "id",
    "description": "description",
    "amount": "amount",
    "date": "date",
    "entry-type": "entry_type",
    "currency": "currency",
    "account-holder-id": "account_holder_id",
    "country": "country",
}


class TransactionsCommand(ResourceCommand):
    """Submit transactions for enrichment and read them back."""

    name = "transactions"
    description = "Enrich, batch, fetch and list transactions"
    usage = (
        "transactions <enrich|batch|batch-status|get|list> "
        "[--file FILE] [--id ID --description TEXT --amount N --date YYYY-MM-DD "
        "--entry-type debit|credit --currency CUR --account-holder-id ID] "
        "[--limit N] [--cursor C] [--json]"
    )
    aliases = ["tx", "transaction"]

    subcommands = {
        "enrich": "_enrich",
        "batch": "_batch",
        "batch-status": "_batch_status",
        "get": "_get",
        "list": "_list",
    }

    def build_transaction(self, flags: dict[str, Any]) -> Optional[dict[str, Any]]:
        """Build a transaction body from flags; only given flags are sent."""
        tx: dict[str, Any] = {}
        for flag, field_name in TRANSACTION_FLAGS.items():
            value = flags.get(flag)
            if isinstance(value, str):
                tx[field_name] = value

        if "amount" in tx:
            try:
                amount = Decimal(tx["amount"])
            except InvalidOperation:
                print_error(f"--amount must be a number, got: {tx['amount']}")
                return None
            try:
                decimal_to_number(amount)
            except ValueError as e:
                print_error(f"--amount cannot be sent exactly: {e}")
                return None
            tx["amount"] = amount

        if not tx:
            print_error("No transaction given. Pass --file FILE or the transaction flags.")
            self._print_usage()
            return None
        return tx

    def _enrich(self, flags: dict[str, Any], positional: list[str]) -> bool:
        if "file" in flags:
            tx = self.load_json_file(flags["file"])
            if tx is None:
                return False
            if not isinstance(tx, dict):
                print_error("The transaction file must hold a single JSON object.")
                return False
        else:
            tx = self.build_transaction(flags)
            if tx is None:
                return False

        response = self.call("Enriching transaction...", lambda: self.api.enrich_transaction(tx), style="processing")
        if not response.success:
            return False

        self.emit(flags, response.data, lambda data: console.print(create_transaction_panel(data or {})))
        return True

    def _batch(self, flags: dict[str, Any], positional: list[str]) -> bool:
        path = flags.get("file") or (positional[0] if positional else None)
        if not isinstance(path, str):
            print_error("Missing --file FILE with a JSON list of transactions.")
            return False

        payload = self.load_json_file(path)
        if payload is None:
            return False
        transactions = payload.get("transactions") if isinstance(payload, dict) else payload
        if not isinstance(transactions, list):
            print_error('The batch file must hold a JSON list or {"transactions": [...]}.')
            return False

        response = self.call(
            f"Submitting {len(transactions)} transactions...",
            lambda: self.api.enrich_batch(transactions),
            style="batch",
        )
        if not response.success:
            return False

        data = response.data
        if self.wants_json(flags):
            print_json(data)
            return True

        batch_id = data.get("id") if isinstance(data, dict) else None
        print_success(f"Batch submitted ({len(transactions)} transactions)")
        if batch_id:
            console.print(f"  [muted]Batch ID:[/muted] [id]{batch_id}[/id]")
            console.print(f"  [muted]Check it with:[/muted] [command]ntropy transactions batch-status {batch_id}[/command]")
        return True

    def _batch_status(self, flags: dict[str, Any], positional: list[str]) -> bool:
        batch_id = self.positional_id(positional, "batch ID")
        if batch_id is None:
            return False

        response = self.call(f"Fetching batch {batch_id}...", lambda: self.api.get_batch(batch_id))
        if not response.success:
            return False

        self.emit(flags, response.data, lambda data: console.print(create_document_panel(data, f"Batch {batch_id}")))
        return True

    def _get(self, flags: dict[str, Any], positional: list[str]) -> bool:
        tx_id = self.positional_id(positional, "transaction ID")
        if tx_id is None:
            return False

        response = self.call(f"Fetching transaction {tx_id}...", lambda: self.api.get_transaction(tx_id))
        if not response.success:
            return False

        self.emit(flags, response.data, lambda data: console.print(create_transaction_panel(data or {})))
        return True

    def _list(self, flags: dict[str, Any], positional: list[str]) -> bool:
        limit = self.int_flag(flags, "limit", self.config.page_size)
        if limit is None:
            return False
        cursor = flags.get("cursor") if isinstance(flags.get("cursor"), str) else None

        response = self.call(
            "Fetching transactions...",
            lambda: self.api.list_transactions(limit=limit, cursor=cursor),
        )
        if not response.success:
            return False

        if self.wants_json(flags):
            print_json(response.data)
            return True

        transactions = extract_items(response.data, "transactions")
        console.print()
        if not transactions:
            console.print("  [muted]No transactions found.[/muted]")
            return True

        console.print(create_transactions_table(transactions))
        cursor_next = next_cursor(response.data)
        if cursor_next:
            console.print(f"\n  [muted]More results:[/muted] [command]ntropy transactions list --cursor {cursor_next}[/command]")
        return True
