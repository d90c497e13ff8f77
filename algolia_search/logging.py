"""
Logging Configuration for the Algolia Search Client

The library itself only creates module loggers and never installs handlers;
applications and the command line call setup_logging() to get console output.

Log Levels:
- DEBUG: Every host attempt
- WARNING: A host failed and the next one is tried
- ERROR: Every host failed

Example Usage:
    from algolia_search.logging import setup_logging

    setup_logging(verbosity=2)
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)

VERBOSITY_LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


def setup_logging(verbosity: int = 0, level: Optional[str] = None) -> None:
    """Setup logging configuration.

    Args:
        verbosity: Verbosity level (0-3)
        level: Explicit level name, overrides verbosity
    """
    if level is not None:
        log_level = getattr(logging, level.upper(), logging.INFO)
    else:
        log_level = VERBOSITY_LEVELS.get(verbosity, logging.DEBUG)

    # Remove all existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.setLevel(log_level)

    console_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbosity > 2,
    )
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root_logger.addHandler(console_handler)

    # HTTP internals only at the highest verbosity
    http_level = logging.DEBUG if verbosity > 2 else logging.WARNING
    logging.getLogger("httpx").setLevel(http_level)
    logging.getLogger("httpcore").setLevel(http_level)


__all__ = ["setup_logging"]
