"""
Application logging setup for the migration advisor.

Routes the package's standard library loggers to the console: a Rich
handler in dev mode, a plain stream handler otherwise.
"""

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme


# Custom theme for log levels
_LOG_THEME = Theme({
    "logging.level.debug": "dim cyan",
    "logging.level.info": "green",
    "logging.level.warning": "yellow",
    "logging.level.error": "bold red",
    "logging.level.critical": "bold white on red",
    "log.time": "dim",
    "log.message": "default",
    "log.path": "dim",
})

# Logs go to stderr so JSON output on stdout stays clean
_console = Console(theme=_LOG_THEME, stderr=True)

ROOT_LOGGER_NAME = 'migration_advisor'


def setup_logging(
    level: str = 'WARNING',
    log_format: Optional[str] = None,
    rich_tracebacks: bool = True,
    show_path: bool = False,
    dev_mode: bool = False,
) -> logging.Logger:
    """
    Configure the 'migration_advisor' logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format string for the plain handler. If None, uses default format.
        rich_tracebacks: Whether to use rich for exception tracebacks (dev mode only)
        show_path: Whether to show file path in console logs (dev mode only)
        dev_mode: Whether to use rich console output

    Returns:
        The configured package logger.
    """
    if log_format is None:
        log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    level_value = getattr(logging, level.upper())

    if dev_mode:
        handler: logging.Handler = RichHandler(
            console=_console,
            level=level_value,
            show_path=show_path,
            rich_tracebacks=rich_tracebacks,
            markup=False,
        )
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(log_format))
    handler.setLevel(level_value)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level_value)
    logger.handlers.clear()
    logger.addHandler(handler)
    # Prevent propagation to root logger
    logger.propagate = False
    return logger


# Avoid "No handler found" warnings when setup_logging hasn't been called
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())
