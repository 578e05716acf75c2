"""Spinner shown while a request is in flight."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from ntropy_cli.ui.console import console

# Spinner styles per kind of work
SPINNER_STYLES = {
    "default": "dots",
    "loading": "dots12",
    "processing": "arc",
    "batch": "bouncingBar",
}


@contextmanager
def create_spinner(
    message: str,
    style: str = "default",
) -> Generator[None, None, None]:
    """Context manager for showing a spinner during an operation.

    Nothing is drawn when stdout is not a terminal, so piped ``--json``
    output stays clean.
    """
    if not console.is_terminal:
        yield
        return

    spinner_type = SPINNER_STYLES.get(style, "dots")
    with console.status(
        f"[primary]{message}[/primary]",
        spinner=spinner_type,
        spinner_style="spinner",
    ):
        yield
