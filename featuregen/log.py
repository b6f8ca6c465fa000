"""Logging setup for the featuregen CLI."""

import logging
import sys

LOGGER_NAME = "featuregen"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Configure the package logger with a single stderr handler.

    Args:
        level: Log level name (e.g. "INFO", "DEBUG").

    Returns:
        The configured ``featuregen`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    return logger
