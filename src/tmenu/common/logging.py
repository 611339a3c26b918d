"""Logging utilities for tmenu."""

from __future__ import annotations

import logging
import sys
from pathlib import Path


def setup_logging(
    name: str,
    level: str | int = "WARNING",
    log_file: Path | None = None,
    console: bool = True,
) -> logging.Logger:
    """Setup standardized logging configuration.

    Console output goes to stderr: stdout is reserved for ``--print`` and
    ``list`` output.

    Args:
        name: Logger name (usually the package name)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL) or logging constant
        log_file: Optional file path to write logs
        console: Whether to also log to console (default: True)

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logging("tmenu", level="DEBUG")
        >>> logger.debug("Scanning search path")
    """
    logger = logging.getLogger(name)
    if isinstance(level, str):
        logger.setLevel(getattr(logging, level.upper()))
    else:
        logger.setLevel(level)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
