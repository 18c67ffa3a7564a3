"""Logging configuration for the command line application."""

import logging
from typing import Union

LOGGER_NAME = "fintrack"
CONSOLE_FORMAT = "[%(asctime)s] %(levelname)-8s [%(name)s] %(message)s"


def setup_logging(level: Union[int, str] = logging.WARNING) -> logging.Logger:
    """Configure the ``fintrack`` logger with a single stderr handler.

    Calling it again replaces the handler instead of stacking another one.

    Args:
        level: Logging level or level name

    Returns:
        Configured package logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(handler)
    return logger
