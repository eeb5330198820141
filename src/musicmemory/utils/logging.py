"""Logging helpers shared across the package."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "musicmemory"

_INSTALLED_HANDLERS: set[str] = set()


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or a child of it when *name* is given."""

    if not name:
        return logging.getLogger(LOGGER_NAME)
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def ensure_console_logger(
    logger: logging.Logger,
    handler_name: str,
    *,
    level: int = logging.INFO,
) -> None:
    if handler_name in _INSTALLED_HANDLERS:
        return
    for handler in logger.handlers:
        if getattr(handler, "name", None) == handler_name:
            _INSTALLED_HANDLERS.add(handler_name)
            return
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.name = handler_name
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    _INSTALLED_HANDLERS.add(handler_name)
