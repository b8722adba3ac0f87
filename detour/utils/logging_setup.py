"""
Logging configuration utilities.

This module provides standardized logging setup for the detour service
and its command-line tools.
"""

import logging
import sys

DEFAULT_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(
    name: str = None,
    level: int = logging.INFO,
    format_string: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """
    Send a logger's output to stdout.

    Args:
        name: Logger name (defaults to root logger if None)
        level: Logging level (default: INFO)
        format_string: Log message format

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logging("detour", level=logging.DEBUG)
        >>> logger.info("Application started")
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear existing handlers to avoid duplicates
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(console_handler)

    return logger


def parse_log_level(level_name: str) -> int:
    """
    Convert a level name such as "debug" to a logging level.

    Raises:
        ValueError: If the name is not one of LOG_LEVELS
    """
    name = level_name.upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level_name}, expected one of: {', '.join(LOG_LEVELS)}")
    return getattr(logging, name)
