# octoloom/log_config.py
"""Logging configuration for the octoloom library using Loguru.

This module provides a centralized function to configure the Loguru logger
with a standardized format, level, and sink for consistent logging across
the GitHub client and its resource clients.
"""

import sys

from loguru import logger


def configure_logging(level: str = "INFO", sink=sys.stderr):
    """
    Configures Loguru logger.

    Removes default handlers and adds a new one with the specified level and sink.
    Tracebacks are rendered without local variable values, which may hold
    access tokens.

    Args:
        level: The minimum logging level (e.g., "DEBUG", "INFO", "WARNING").
        sink: The output sink (e.g., sys.stderr, "octoloom.log").
    """
    logger.remove()
    logger.add(
        sink,
        level=level.upper(),
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        colorize=sink is sys.stderr,
        backtrace=True,
        diagnose=False,
    )
    logger.info(f"Loguru logger configured with level={level.upper()} writing to {sink}")
