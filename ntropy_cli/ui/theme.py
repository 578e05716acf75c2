"""Theme and color definitions for the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from rich.style import Style
from rich.theme import Theme as RichTheme


@dataclass
class Theme:
    """Color theme for the CLI - Teal & Amber palette."""

    # Primary colors
    primary: str = "#2EC4B6"      # Teal - main accent
    secondary: str = "#FF9F1C"    # Amber - secondary accent
    tertiary: str = "#6C63FF"     # Indigo - tertiary accent

    # Status colors
    success: str = "#00E676"      # Bright green
    error: str = "#FF5252"        # Red
    warning: str = "#FFB347"      # Orange-yellow
    info: str = "#8ECAE6"         # Light blue

    # Text colors
    text: str = "#E8E8E8"         # Light gray
    muted: str = "#888888"        # Muted gray
    highlight: str = "#FFFFFF"    # White
    dim: str = "#555555"          # Dim gray

    # Money
    debit: str = "#FF6B6B"        # Outgoing amounts
    credit: str = "#51CF66"       # Incoming amounts

    # Logo gradient colors (Teal to Indigo)
    logo_1: str = "#2EC4B6"
    logo_2: str = "#3AAFC9"
    logo_3: str = "#4A9ADB"
    logo_4: str = "#5B84EC"
    logo_5: str = "#6C63FF"

    def to_rich_theme(self) -> RichTheme:
        """Convert to Rich theme."""
        return RichTheme({
            # Core styles
            "primary": Style(color=self.primary),
            "secondary": Style(color=self.secondary),
            "tertiary": Style(color=self.tertiary),
            "primary.bold": Style(color=self.primary, bold=True),
            "secondary.bold": Style(color=self.secondary, bold=True),

            # Status styles
            "success": Style(color=self.success, bold=True),
            "error": Style(color=self.error, bold=True),
            "warning": Style(color=self.warning),
            "info": Style(color=self.info),

            # Text styles
            "text": Style(color=self.text),
            "muted": Style(color=self.muted),
            "dim": Style(color=self.dim),
            "highlight": Style(color=self.highlight, bold=True),

            # Logo gradient
            "logo.1": Style(color=self.logo_1, bold=True),
            "logo.2": Style(color=self.logo_2, bold=True),
            "logo.3": Style(color=self.logo_3, bold=True),
            "logo.4": Style(color=self.logo_4, bold=True),
            "logo.5": Style(color=self.logo_5, bold=True),

            # Semantic styles
            "command": Style(color=self.primary, bold=True),
            "id": Style(color=self.secondary),
            "number": Style(color=self.warning),
            "amount.debit": Style(color=self.debit),
            "amount.credit": Style(color=self.credit),
            "merchant": Style(color=self.highlight, bold=True),
            "label": Style(color=self.tertiary, bold=True),
            "secret": Style(color=self.success),
            "url": Style(color=self.info, underline=True),

            # Progress and spinner styles
            "spinner": Style(color=self.primary),
        })


# Default theme instance
_theme = Theme()


def get_theme() -> Theme:
    """Get the current theme."""
    return _theme
