"""Logging setup for the playground server."""

import logging
import sys
from typing import Optional

LOGGER_NAME = "playground"


def setup_logging(log_level: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger with a single stdout handler.

    Calling it again only updates the level; no duplicate handlers are added.

    Args:
        log_level: Log level name (DEBUG, INFO, WARNING, ERROR). Defaults to INFO

    Returns:
        The configured package logger
    """
    level = getattr(logging, (log_level or "INFO").upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)

    return logger
