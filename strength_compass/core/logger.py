"""Loguru configuration for Strength Compass.

One coloured stderr sink, plus a plain-text file sink when LOG_FILE is set.
File lines carry the keyword extras passed to each logger call.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from strength_compass.config.settings import Settings

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} - {message} | {extra}"


def setup_logger(level: str = "INFO", log_file: str | None = None, rotation: str = "10 MB") -> None:
    """Replace all loguru sinks.

    Args:
        level: Minimum level for both sinks
        log_file: Optional log file path; parent directories are created
        rotation: When the file sink rolls over (e.g. "10 MB", "1 day")
    """
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, format=FILE_FORMAT, level=level, rotation=rotation)

    logger.debug("Logger initialized", level=level, log_file=log_file)


def configure_from_settings(settings: Settings | None = None) -> None:
    """Apply LOG_LEVEL / LOG_FILE from *settings* (the module singleton by default)."""
    if settings is None:
        from strength_compass.config.settings import settings

    setup_logger(level=settings.log_level, log_file=settings.log_file)
