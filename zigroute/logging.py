"""
ZIGROUTE Logging Utilities

Simple logging setup using Python's standard logging library.
The library itself only emits records under the ``zigroute`` namespace;
applications (and the CLI) decide where they go.

Usage:
    from zigroute.logging import get_logger, setup_logging

    setup_logging(level="DEBUG")
    logger = get_logger(__name__)
    logger.info("Router initialized")
"""

import logging
import sys
from typing import Optional

DEFAULT_FORMAT = '[%(asctime)s] %(levelname)-8s | %(name)s - %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _resolve_level(level: str) -> int:
    level_name = str(level).upper()
    if level_name not in VALID_LOG_LEVELS:
        raise ValueError(f"Log level must be one of: {', '.join(VALID_LOG_LEVELS)}")
    return getattr(logging, level_name)


def get_logger(name: str = "zigroute", level: str = "INFO") -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__ or module name)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logging.Logger instance
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(_resolve_level(level))

    return logger


def setup_logging(
    level: str = "INFO",
    format_string: Optional[str] = None,
    date_format: Optional[str] = None
):
    """
    Configure logging globally for the entire application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom log format
        date_format: Custom date format

    Usage:
        setup_logging(level="DEBUG")
        setup_logging(level="INFO", format_string="%(levelname)s | %(message)s")
    """
    logging.basicConfig(
        level=_resolve_level(level),
        format=format_string or DEFAULT_FORMAT,
        datefmt=date_format or DEFAULT_DATE_FORMAT,
        stream=sys.stdout,
        force=True  # Reset any existing configuration
    )
