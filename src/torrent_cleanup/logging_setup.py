"""Loguru sink configuration for the command-line front end."""

from __future__ import annotations

import os
import sys

from loguru import logger


def setup_logging(
    log_level: str = "INFO", log_file: str | os.PathLike[str] | None = None
) -> None:
    """Configure Loguru sinks.

    Args:
        log_level: Logging level (e.g., "DEBUG", "INFO", "WARNING").
        log_file: Optional log file path for file output.
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    if log_file:
        logger.add(
            log_file,
            level=log_level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        )

    logger.debug("Logging configured: level={}, file={}", log_level, log_file)
