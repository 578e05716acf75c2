"""Reports command - account holder reports and metrics."""

from __future__ import annotations

from typing import Any

from ntropy_cli.commands.base import ResourceCommand
from ntropy_cli.ui.console import console
from ntropy_cli.ui.panels import create_document_panel


class ReportsCommand(ResourceCommand):
    """Fetch reports and metrics for an account holder."""

    name = "reports"
    description = "Show an account holder's report or metrics"
    usage = "reports <report|metrics> <account_holder_id> [--period PERIOD] [--json]"
    aliases = ["rpt"]

    subcommands = {
        "report": "_report",
        "metrics": "_metrics",
    }

    def _report(self, flags: dict[str, Any], positional: list[str]) -> bool:
        holder_id = self.positional_id(positional, "account holder ID")
        if holder_id is None:
            return False
        period = flags.get("period") if isinstance(flags.get("period"), str) else None

        response = self.call(
            f"Fetching report for {holder_id}...",
            lambda: self.api.get_report(holder_id, period=period),
        )
        if not response.success:
            return False

        title = f"Report · {holder_id}" + (f" · {period}" if period else "")
        self.emit(flags, response.data, lambda data: console.print(create_document_panel(data, title)))
        return True

    def _metrics(self, flags: dict[str, Any], positional: list[str]) -> bool:
        holder_id = self.positional_id(positional, "account holder ID")
        if holder_id is None:
            return False

        response = self.call(f"Fetching metrics for {holder_id}...", lambda: self.api.get_metrics(holder_id))
        if not response.success:
            return False

        self.emit(flags, response.data, lambda data: console.print(create_document_panel(data, f"Metrics · {holder_id}")))
        return True
