"""Logging configuration for fifocalc."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "WARNING", console: Console | None = None) -> None:
    """Route fifocalc log records through rich.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...).
        console: Console to log to. Defaults to stderr.
    """
    logger = logging.getLogger("fifocalc")
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
