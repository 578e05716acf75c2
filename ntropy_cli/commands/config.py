"""Config command - store and show the API credentials."""

from __future__ import annotations

from typing import Any

from ntropy_cli.commands.base import ResourceCommand
from ntropy_cli.core.store import ACCESS_TOKEN, API_KEY
from ntropy_cli.ui.console import console, print_json, print_success, print_warning
from ntropy_cli.ui.panels import create_config_panel, mask_secret


class ConfigCommand(ResourceCommand):
    """Manage CLI configuration."""

    name = "config"
    description = "Set or show the stored API key and access token"
    usage = "config <set|show|path> [--api-key KEY] [--access-token TOKEN]"
    aliases = ["cfg"]

    subcommands = {
        "set": "_set",
        "show": "_show",
        "path": "_path",
    }
    default_subcommand = "show"
    requires_auth = False

    def _set(self, flags: dict[str, Any], positional: list[str]) -> bool:
        api_key = flags.get("api-key")
        access_token = flags.get("access-token")

        if not isinstance(api_key, str) and not isinstance(access_token, str):
            print_warning("Nothing to set. Pass --api-key KEY and/or --access-token TOKEN.")
            return False

        if isinstance(api_key, str):
            self.store.set(API_KEY, api_key)
            print_success("API key set")
        if isinstance(access_token, str):
            self.store.set(ACCESS_TOKEN, access_token)
            print_success("Access token set")
        return True

    def _show(self, flags: dict[str, Any], positional: list[str]) -> bool:
        values = {
            "API key": self.store.get(API_KEY),
            "Access token": self.store.get(ACCESS_TOKEN),
        }
        if self.wants_json(flags):
            print_json({
                API_KEY: mask_secret(values["API key"]) or None,
                ACCESS_TOKEN: mask_secret(values["Access token"]) or None,
                "configured": self.store.is_configured(),
            })
            return True

        console.print()
        console.print(create_config_panel(values, str(getattr(self.store, "path", "(memory)"))))
        if not self.store.is_configured():
            console.print("\n  [warning]⚠ No API key stored.[/warning] Run: [command]ntropy config set --api-key KEY[/command]")
        return True

    def _path(self, flags: dict[str, Any], positional: list[str]) -> bool:
        console.print(str(getattr(self.store, "path", "(memory)")))
        return True
