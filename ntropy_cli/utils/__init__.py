"""Utility functions for the CLI."""

from ntropy_cli.utils.completions import CommandCompleter
from ntropy_cli.utils.history import CommandHistory

__all__ = ["CommandCompleter", "CommandHistory"]
