"""Loguru sink setup for command-line use."""

from __future__ import annotations

import sys
from typing import Any, TextIO

from loguru import logger

_FORMAT = "{time:HH:mm:ss} | {level: <8} | {name}:{line} - {message}"


def _stderr(message: str) -> None:
    # Resolved per call so redirected streams (pytest, CliRunner) are honoured.
    sys.stderr.write(message)


def configure_logging(level: str = "WARNING", sink: TextIO | Any | None = None) -> int:
    """Replace loguru's default handler with a single sink at ``level``.

    The package logger is disabled on import; this turns it back on.

    Returns the handler id so callers can remove it again.
    """

    logger.remove()
    logger.enable("availability")
    return logger.add(sink or _stderr, level=level.upper(), format=_FORMAT)


__all__ = ["configure_logging"]
