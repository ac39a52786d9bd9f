"""Logging configuration for srw-build.

Verbosity follows the runner's historical scale: positive values add debug
output, negative values silence progressively more severe messages.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOGGER_NAME = "srw_build"
DEFAULT_LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(message)s"
DEFAULT_DATE_FORMAT = "%H:%M:%S"


def verbosity_to_level(verbosity: int) -> int:
    """Map a verbosity count (``-v`` minus ``-q``) to a logging level."""
    if verbosity >= 1:
        return logging.DEBUG
    if verbosity == 0:
        return logging.INFO
    if verbosity == -1:
        return logging.WARNING
    if verbosity == -2:
        return logging.ERROR
    return logging.CRITICAL


def setup_logging(verbosity: int = 0, log_file: str | Path | None = None) -> logging.Logger:
    """Configure the ``srw_build`` logger with console and optional file output.

    Previously installed handlers are removed, so repeated calls reconfigure
    rather than duplicate output.
    """
    level = verbosity_to_level(verbosity)

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)

    formatter = logging.Formatter(DEFAULT_LOG_FORMAT, DEFAULT_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        # The file records everything; the console honours verbosity.
        logger.setLevel(logging.DEBUG)

    return logger
