"""Logging configuration for the ``ntropy_cli`` package.

Library modules only call ``logging.getLogger(__name__)``; the entry point
calls ``configure_logging`` once to attach a handler to the package root
logger. Log records go to stderr so ``--json`` output on stdout stays
machine readable.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

_PKG_LOGGER_NAME = "ntropy_cli"
_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_handler: logging.Handler | None = None


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
    return logging.WARNING


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Configure the package root logger.

    Calling it again only updates the level, so the REPL and one-shot
    paths can both call it without stacking handlers.
    """
    global _handler

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    logger.setLevel(_parse_level(level))

    if _handler is None:
        _handler = logging.StreamHandler(stream or sys.stderr)
        _handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))
        logger.addHandler(_handler)
        logger.propagate = False

    return logger
