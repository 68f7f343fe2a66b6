"""
Logging configuration for the sheets CLI.

Library modules only create loggers; handlers are installed here.
"""
from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def setup_logging(level: str = "WARNING", console: Console | None = None) -> None:
    """Route engine logs to stderr through rich."""
    level_name = level.upper()
    if level_name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level}")

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))

    for name in ("sheet_engine", "sheet_io"):
        logger = logging.getLogger(name)
        logger.setLevel(level_name)
        # Prevent duplicate handlers
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.propagate = False
