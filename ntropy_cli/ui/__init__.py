"""UI components for the Ntropy CLI."""

from ntropy_cli.ui.console import (
    console,
    print_error,
    print_json,
    print_success,
    print_warning,
)
from ntropy_cli.ui.logo import print_logo
from ntropy_cli.ui.panels import (
    create_account_holder_panel,
    create_account_holders_table,
    create_config_panel,
    create_document_panel,
    create_labels_table,
    create_transaction_panel,
    create_transactions_table,
)
from ntropy_cli.ui.spinners import create_spinner
from ntropy_cli.ui.theme import Theme, get_theme

__all__ = [
    # Theme
    "Theme",
    "get_theme",
    # Console
    "console",
    "print_error",
    "print_success",
    "print_warning",
    "print_json",
    # Logo
    "print_logo",
    # Panels
    "create_transaction_panel",
    "create_transactions_table",
    "create_account_holder_panel",
    "create_account_holders_table",
    "create_labels_table",
    "create_document_panel",
    "create_config_panel",
    # Spinners
    "create_spinner",
]
