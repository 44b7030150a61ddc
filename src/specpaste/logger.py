"""
Logging configuration for specpaste.

One stdout handler lives on the ``specpaste`` package logger. Module loggers
are its children and carry no handlers, so changing the package level (for
example from ``run_app.py --log-level DEBUG``) reaches every module at once.
"""
import logging
import sys
from typing import Optional, TextIO

from .config import Config

PACKAGE_LOGGER = "specpaste"


def setup_logger(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string
        stream: Where records go, stdout by default

    Returns:
        The ``specpaste`` logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)

    level = level or Config.LOG_LEVEL
    format_string = format_string or Config.LOG_FORMAT
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers = []

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(handler)

    logger.propagate = False
    return logger


logger = setup_logger()


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger under the package namespace.

    ``get_logger(__name__)`` inside the package and ``get_logger("wsgi")``
    outside it both resolve to ``specpaste.<module>``.
    """
    if name == PACKAGE_LOGGER:
        return logger
    if name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
