"""
Centralized logging configuration for CountClock.
"""

import logging
import sys

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_level: int = logging.INFO
_loggers: dict[str, logging.Logger] = {}


def setup_logger(name: str) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    logger.setLevel(_level)
    logger.propagate = False

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(_level)
    handler.setFormatter(logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT))
    logger.addHandler(handler)

    _loggers[name] = logger
    return logger


def set_log_level(level: str | int) -> None:
    """Change the level of every logger created through ``setup_logger``.

    Accepts a level name (``"debug"``, ``"INFO"``) or a numeric level.
    Unknown names fall back to INFO.
    """
    global _level
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    _level = level
    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
