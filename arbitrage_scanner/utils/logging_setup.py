"""
Logging setup for the Arbitrage Scanner entry points.
"""

import logging
import sys
from typing import Optional

from .. import config


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure structured logging with timestamps.

    Args:
        level: Logging level (default: INFO)
        log_file: Optional file to mirror log output into

    Returns:
        Configured package logger
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATE_FORMAT,
        handlers=handlers,
    )
    # Per-request connection chatter only at DEBUG
    logging.getLogger("urllib3").setLevel(level if level <= logging.DEBUG else logging.WARNING)
    return logging.getLogger("arbitrage_scanner")
