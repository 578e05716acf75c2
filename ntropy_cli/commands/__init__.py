"""CLI Commands for the Ntropy CLI."""

from ntropy_cli.commands.account_holders import AccountHoldersCommand
from ntropy_cli.commands.config import ConfigCommand
from ntropy_cli.commands.help import HelpCommand
from ntropy_cli.commands.labels import LabelsCommand
from ntropy_cli.commands.reports import ReportsCommand
from ntropy_cli.commands.transactions import TransactionsCommand

__all__ = [
    "ConfigCommand",
    "TransactionsCommand",
    "AccountHoldersCommand",
    "ReportsCommand",
    "LabelsCommand",
    "HelpCommand",
]
