"""Logger setup with rich console output."""

import logging
import os

from rich.logging import RichHandler


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = RichHandler(show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))
    logger.addHandler(handler)

    # Default to WARNING for library usage, INFO for CLI
    # Can be overridden with ROLODEX_LOG_LEVEL environment variable
    default_level = logging.WARNING
    if name.endswith(".cli"):
        default_level = logging.INFO

    level_name = os.getenv("ROLODEX_LOG_LEVEL", logging.getLevelName(default_level))
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        level = default_level

    logger.setLevel(level)
    return logger


def set_level(level_name: str) -> None:
    """Apply a level to every rolodex_text logger created so far."""
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith("rolodex_text") and isinstance(logger, logging.Logger):
            logger.setLevel(level)
