"""Panel and table components for displaying API responses."""

from __future__ import annotations

import json
from typing import Any, Optional

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

MASK = "*" * 16


def mask_secret(value: Optional[str]) -> str:
    """Hide a stored secret, keeping only its last four characters."""
    if not value:
        return ""
    if len(value) <= 8:
        return MASK
    return f"{MASK}{value[-4:]}"


def label_name(label: Any) -> str:
    """Labels come back either as plain strings or as ``{id, name}`` objects."""
    if isinstance(label, dict):
        return str(label.get("name") or label.get("id") or "")
    return str(label)


def format_amount(amount: Any, entry_type: Optional[str] = None, currency: str = "") -> Text:
    """Style an amount red for debits and green for credits."""
    text = Text()
    style = "amount.debit" if entry_type == "debit" else "amount.credit" if entry_type == "credit" else "number"
    text.append(str(amount if amount is not None else "N/A"), style=style)
    if currency:
        text.append(f" {currency}", style="muted")
    return text


def _field_table() -> Table:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="muted", width=18)
    table.add_column("Value", style="text")
    return table


def create_transaction_panel(tx: dict[str, Any]) -> Panel:
    """Show one enriched transaction."""
    table = _field_table()
    table.add_row("ID", Text(str(tx.get("id", "?")), style="id"))
    table.add_row("Description", str(tx.get("description", "")))
    table.add_row("Amount", format_amount(tx.get("amount"), tx.get("entry_type"), tx.get("currency", "")))
    table.add_row("Date", str(tx.get("date", "")))
    if tx.get("account_holder_id"):
        table.add_row("Account holder", Text(str(tx["account_holder_id"]), style="id"))

    merchant = tx.get("merchant") or {}
    if isinstance(merchant, dict) and merchant.get("name"):
        table.add_row("Merchant", Text(merchant["name"], style="merchant"))

    labels = tx.get("labels") or []
    labels_text = Text()
    for i, label in enumerate(labels):
        if i > 0:
            labels_text.append(", ", style="muted")
        labels_text.append(label_name(label), style="label")
    table.add_row("Labels", labels_text if labels else Text("none", style="dim"))

    location = tx.get("location") or {}
    if isinstance(location, dict):
        country = location.get("country") or (location.get("structured") or {}).get("country")
        if country:
            table.add_row("Country", str(country))

    return Panel(
        table,
        title="[primary]Transaction[/primary]",
        border_style="primary",
        padding=(1, 2),
    )


def create_transactions_table(transactions: list[dict[str, Any]]) -> Table:
    """Tabulate a page of transactions."""
    table = Table(show_header=True, header_style="primary", border_style="muted")
    table.add_column("ID", style="id", no_wrap=True)
    table.add_column("Date", style="text", no_wrap=True)
    table.add_column("Description", style="text", overflow="ellipsis", max_width=40)
    table.add_column("Amount", justify="right")
    table.add_column("Merchant", style="merchant")
    table.add_column("Labels", style="label")

    for tx in transactions:
        merchant = tx.get("merchant") or {}
        table.add_row(
            str(tx.get("id", "")),
            str(tx.get("date", "")),
            str(tx.get("description", "")),
            format_amount(tx.get("amount"), tx.get("entry_type"), tx.get("currency", "")),
            merchant.get("name", "") if isinstance(merchant, dict) else "",
            ", ".join(label_name(label) for label in tx.get("labels") or []),
        )
    return table


def create_account_holder_panel(account_holder: dict[str, Any]) -> Panel:
    """Show one account holder."""
    table = _field_table()
    table.add_row("ID", Text(str(account_holder.get("id", "?")), style="id"))
    table.add_row("Type", str(account_holder.get("type", "")))
    for key, title in (("name", "Name"), ("currency", "Currency"), ("country", "Country")):
        if account_holder.get(key):
            table.add_row(title, str(account_holder[key]))

    return Panel(
        table,
        title="[primary]Account Holder[/primary]",
        border_style="primary",
        padding=(1, 2),
    )


def create_account_holders_table(account_holders: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, header_style="primary", border_style="muted")
    table.add_column("ID", style="id", no_wrap=True)
    table.add_column("Type", style="text")
    table.add_column("Name", style="text")
    table.add_column("Currency", style="muted")
    table.add_column("Country", style="muted")

    for ah in account_holders:
        table.add_row(
            str(ah.get("id", "")),
            str(ah.get("type", "")),
            str(ah.get("name") or ""),
            str(ah.get("currency") or ""),
            str(ah.get("country") or ""),
        )
    return table


def create_labels_table(labels: list[Any]) -> Table:
    table = Table(show_header=True, header_style="primary", border_style="muted")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Label", style="label")
    table.add_column("ID", style="muted")

    for i, label in enumerate(labels, start=1):
        label_id = str(label.get("id", "")) if isinstance(label, dict) else ""
        table.add_row(str(i), label_name(label), label_id)
    return table


def create_document_panel(data: Any, title: str) -> Panel:
    """Key/value view of an opaque JSON document (reports, metrics, batches)."""
    table = _field_table()

    if isinstance(data, dict):
        for key, value in data.items():
            if isinstance(value, dict):
                value_str = ", ".join(f"{k}={v}" for k, v in value.items())
            elif isinstance(value, list):
                value_str = f"[{len(value)} items]"
            else:
                value_str = str(value)
            table.add_row(str(key), value_str)
    else:
        table.add_row("value", json.dumps(data, default=str))

    return Panel(
        table,
        title=f"[primary]{title}[/primary]",
        border_style="primary",
        padding=(1, 2),
    )


def create_config_panel(values: dict[str, Optional[str]], path: str) -> Panel:
    """Show stored settings with secrets masked."""
    table = _field_table()
    for name, value in values.items():
        if value:
            table.add_row(name, Text(mask_secret(value), style="secret"))
        else:
            table.add_row(name, Text("not set", style="dim"))
    table.add_row("File", Text(path, style="muted"))

    return Panel(
        table,
        title="[primary]Ntropy CLI Configuration[/primary]",
        border_style="primary",
        padding=(1, 2),
    )
