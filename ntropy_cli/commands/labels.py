"""Labels command - list the labels the API can assign."""

from __future__ import annotations

from typing import Any

from ntropy_cli.commands.base import ResourceCommand
from ntropy_cli.core.api_client import extract_items
from ntropy_cli.ui.console import console, print_json
from ntropy_cli.ui.panels import create_labels_table


class LabelsCommand(ResourceCommand):
    """List transaction labels."""

    name = "labels"
    description = "List the labels transactions can be classified with"
    usage = "labels [list] [--json]"
    aliases = ["label"]

    subcommands = {"list": "_list"}
    default_subcommand = "list"

    def _list(self, flags: dict[str, Any], positional: list[str]) -> bool:
        response = self.call("Fetching labels...", self.api.list_labels)
        if not response.success:
            return False

        if self.wants_json(flags):
            print_json(response.data)
            return True

        labels = extract_items(response.data, "labels")
        console.print()
        if not labels:
            console.print("  [muted]No labels returned.[/muted]")
            return True

        console.print(create_labels_table(labels))
        console.print(f"\n  [muted]{len(labels)} labels[/muted]")
        return True
