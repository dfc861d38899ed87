"""Logging configuration for the job tracker extraction pipeline."""

import logging
import sys
from typing import Optional, Union

from config import LOG_LEVEL


def get_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Get a stdout logger. Level falls back to LOG_LEVEL from the environment."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
    if level is None:
        level = LOG_LEVEL
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger
