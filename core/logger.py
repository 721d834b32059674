"""
Logging configuration for the schedule sync service.
Every module gets its logger from setup_logger(__name__).
"""
import logging
import os
import sys
from typing import Dict, Optional

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers handed out so far, re-levelled by set_log_level()
_loggers: Dict[str, logging.Logger] = {}


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    return getattr(logging, name, logging.INFO)


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        name: Logger name (usually __name__)
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to env LOG_LEVEL or INFO.

    Returns:
        Configured logger instance
    """
    log_level = _resolve_level(level)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Avoid duplicate handlers
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(log_level)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    _loggers[name] = logger
    return logger


def set_log_level(level: str) -> None:
    """
    Apply a log level to every logger created through setup_logger.

    Module loggers are created at import time, before settings from .env
    are known, so the entry point calls this once configuration is loaded.
    """
    log_level = _resolve_level(level)
    for logger in _loggers.values():
        logger.setLevel(log_level)
        for handler in logger.handlers:
            handler.setLevel(log_level)
