"""Rich console instance and message helpers."""

from __future__ import annotations

import json
from typing import Any

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ntropy_cli.ui.theme import get_theme


# Create the global console with our theme
console = Console(theme=get_theme().to_rich_theme(), highlight=True)


def _print_boxed(message: str, title: str, color: str, icon: str) -> None:
    content = Text()
    content.append(message, style=color)

    console.print(Panel(
        content,
        title=f"[{color} bold]{icon} {title}[/{color} bold]",
        border_style=color,
        box=box.ROUNDED,
        padding=(0, 2),
    ))


def print_error(message: str, title: str = "Error") -> None:
    """Print an error message in a red panel."""
    _print_boxed(message, title, "#FF5252", "✖")


def print_success(message: str) -> None:
    """Print a one-line success marker."""
    console.print(f"[success]✔[/success] {message}")


def print_warning(message: str, title: str = "Warning") -> None:
    """Print a warning message in an amber panel."""
    _print_boxed(message, title, "#FFB347", "⚠")


def print_json(data: Any) -> None:
    """Print a decoded response body as JSON."""
    console.print_json(json.dumps(data, indent=2, default=str))
