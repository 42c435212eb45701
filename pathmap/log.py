"""
pathmap.log — Logging helpers.

The library only emits DEBUG records (level creation and write
conflicts) through loggers under the "pathmap" namespace.  Nothing is
printed unless the application configures logging, e.g.:

    from pathmap.log import setup_logging
    setup_logging(logging.DEBUG)
"""

import logging
import sys
from typing import Optional, TextIO

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# Compact format for console use
SIMPLE_FORMAT = "%(levelname)s: %(message)s"

PACKAGE_LOGGER = "pathmap"


def get_logger(name: str) -> logging.Logger:
    """Logger for `name`; pass `__name__` from inside the package."""
    return logging.getLogger(name)


def setup_logging(
    level: int = logging.INFO,
    format_str: str = DEFAULT_FORMAT,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Attach a stream handler to the "pathmap" logger.

    Handlers previously added by this function are replaced, so it is
    safe to call more than once.

    Args:
        level: log level for the logger and handler
        format_str: logging.Formatter format string
        stream: output stream, sys.stderr by default

    Returns:
        The configured "pathmap" logger.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers = [
        h for h in package_logger.handlers
        if not getattr(h, "_pathmap_console", False)
    ]
    package_logger.setLevel(level)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_str))
    handler._pathmap_console = True
    package_logger.addHandler(handler)

    return package_logger
