"""Console logging with rich formatting.

Modules log through ``logging.getLogger(__name__)``; only the CLI entry
point calls ``configure_logging``.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

APP_LOGGER = "decor_admin"

# stderr keeps log lines out of the command output
console = Console(stderr=True)


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single RichHandler to the package logger."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = RichHandler(
        console=console,
        show_time=True,
        show_level=True,
        show_path=False,
        log_time_format="%m/%d/%y %H:%M:%S",
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    app_logger = logging.getLogger(APP_LOGGER)
    app_logger.handlers.clear()
    app_logger.addHandler(handler)
    app_logger.setLevel(log_level)
    app_logger.propagate = False
    return app_logger
