from __future__ import annotations

import logging

from rich.logging import RichHandler

LOGGER_NAME = "newsroom"


def _level_from_string(level: str) -> int:
    return getattr(logging, (level or "INFO").upper(), logging.INFO)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the package logger. Safe to call more than once."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_level_from_string(level))
    logger.handlers = []
    logger.propagate = False

    handler = RichHandler(rich_tracebacks=True, show_time=True, show_level=True)
    handler.setLevel(_level_from_string(level))
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger
