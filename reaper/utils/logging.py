"""Logging setup."""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "reaper"


def setup_logging(level: str = "INFO", verbose: bool = False, console: Optional[Console] = None) -> logging.Logger:
    """Configure the package logger with a Rich handler.

    Calling this again replaces the previous handler instead of adding another.

    Args:
        level: Log level name (e.g. "INFO", "DEBUG")
        verbose: Include file paths and full tracebacks in log output
        console: Console to log to (default: stderr)

    Returns:
        The configured package logger
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    logger.propagate = False

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=verbose,
        markup=False,
    )
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)

    return logger
