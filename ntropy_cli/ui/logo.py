"""ASCII art logo for the Ntropy CLI."""

from __future__ import annotations

from rich.align import Align
from rich.console import Group
from rich.text import Text

from ntropy_cli import __version__
from ntropy_cli.ui.console import console

LOGO_LINES = [
    "███╗   ██╗████████╗██████╗  ██████╗ ██████╗ ██╗   ██╗",
    "████╗  ██║╚══██╔══╝██╔══██╗██╔═══██╗██╔══██╗╚██╗ ██╔╝",
    "██╔██╗ ██║   ██║   ██████╔╝██║   ██║██████╔╝ ╚████╔╝ ",
    "██║╚██╗██║   ██║   ██╔══██╗██║   ██║██╔═══╝   ╚██╔╝  ",
    "██║ ╚████║   ██║   ██║  ██║╚██████╔╝██║        ██║   ",
    "╚═╝  ╚═══╝   ╚═╝   ╚═╝  ╚═╝ ╚═════╝ ╚═╝        ╚═╝   ",
]

# Theme styles, top to bottom
GRADIENT_STYLES = ["logo.1", "logo.2", "logo.3", "logo.4", "logo.5", "logo.5"]

HINT_COMMANDS = ["config", "transactions", "account-holders", "reports", "labels", "help", "quit"]


def create_logo_text() -> Text:
    """Create the styled logo text."""
    text = Text()
    for i, line in enumerate(LOGO_LINES):
        text.append(line, style=GRADIENT_STYLES[i % len(GRADIENT_STYLES)])
        if i < len(LOGO_LINES) - 1:
            text.append("\n")
    return text


def create_full_logo(show_tagline: bool = True, show_commands: bool = True) -> Group:
    """Create the full logo with all elements."""
    elements = [Align.center(create_logo_text())]

    if show_tagline:
        elements.append(Text())
        tagline = Text()
        tagline.append("◆ ", style="secondary")
        tagline.append("Transaction enrichment from your terminal", style="text")
        tagline.append(f"  v{__version__}", style="muted")
        tagline.append(" ◆", style="secondary")
        elements.append(Align.center(tagline))

    if show_commands:
        elements.append(Text())
        commands_text = Text()
        commands_text.append("Commands: ", style="muted")
        for i, cmd in enumerate(HINT_COMMANDS):
            if i > 0:
                commands_text.append(" • ", style="dim")
            commands_text.append(cmd, style="command")
        elements.append(Align.center(commands_text))

    return Group(*elements)


def print_logo(show_tagline: bool = True, show_commands: bool = True) -> None:
    """Print the logo centered on screen."""
    console.print()
    console.print(create_full_logo(show_tagline, show_commands))
    console.print()
