"""Logging setup shared by the library and the command line entry point."""

from __future__ import annotations

import logging
import sys

from flowchart2html.config import FLOWCHART2HTML_LOG_LEVEL

_PACKAGE_LOGGER = "flowchart2html"
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the package namespace."""
    return logging.getLogger(name)


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Calling this more than once only updates the level.

    Args:
        level: Level name or number. Defaults to ``FLOWCHART2HTML_LOG_LEVEL``.

    Returns:
        The package logger.
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    resolved = level if level is not None else FLOWCHART2HTML_LOG_LEVEL
    if isinstance(resolved, str):
        resolved = resolved.upper()
    logger.setLevel(resolved)

    if not any(getattr(handler, "_flowchart2html", False) for handler in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        handler._flowchart2html = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
