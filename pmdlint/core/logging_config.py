# Copyright (c) 2025 Anush Krishna
# Licensed under the MIT License. See LICENSE file in the project root.

"""Logging configuration for pmdlint.

The ``pmdlint`` logger doubles as the build output. Banners, the run summary
and the plain-text report dump are INFO records and reach the console
unprefixed, so they read the same as PMD's own output. Anything at WARNING or
above is prefixed with its level and coloured on a terminal. An optional
rotating log file receives everything, DEBUG included, with timestamps.

Functions
---------
setup_logging : Configure the ``pmdlint`` logger
get_logger : Get a module logger

Examples
--------
>>> logger = setup_logging(log_level="DEBUG", file_output=False)
>>> get_logger(__name__).info("Using PMD version [%s]", "7.9.0")
"""
from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, TextIO

LOGGER_NAME = "pmdlint"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"


class BuildOutputFormatter(logging.Formatter):
    """
    Console formatter for build output.

    INFO records are printed as-is. DEBUG and WARNING-and-above records get a
    ``LEVEL:`` prefix, coloured when the stream is a terminal.
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, stream: Optional[TextIO] = None):
        super().__init__('%(message)s')
        self.stream = stream

    def _colour(self) -> bool:
        stream = self.stream or sys.stdout
        return hasattr(stream, 'isatty') and stream.isatty()

    def format(self, record):
        message = super().format(record)
        if record.levelno == logging.INFO:
            return message
        label = record.levelname
        if self._colour() and label in self.COLORS:
            label = f"{self.COLORS[label]}{label}{self.RESET}"
        return f"{label}: {message}"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    log_dir: str = "logs",
    console_output: bool = True,
    file_output: bool = False,
    max_bytes: int = 10 * 1024 * 1024,  # 10 MB
    backup_count: int = 5,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the ``pmdlint`` logger. Calling it again replaces the handlers
    installed by the previous call.

    Args:
        log_level: Console threshold (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Log file name inside ``log_dir``; 'pmdlint.log' when None
        log_dir: Directory for the log file, created on demand
        console_output: Whether build output goes to the console
        file_output: Whether a rotating log file is written
        max_bytes: Size at which the log file rotates
        backup_count: Number of rotated files kept
        stream: Console stream; ``sys.stdout`` when None

    Returns:
        The configured logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_level = _level(log_level)
    # the file handler records DEBUG regardless of the console threshold
    logger.setLevel(logging.DEBUG if file_output else console_level)

    if console_output:
        console = logging.StreamHandler(stream or sys.stdout)
        console.setLevel(console_level)
        console.setFormatter(BuildOutputFormatter(stream))
        logger.addHandler(console)

    if file_output:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        rotating = logging.handlers.RotatingFileHandler(
            log_path / (log_file or 'pmdlint.log'),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8',
        )
        rotating.setLevel(logging.DEBUG)
        rotating.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(rotating)

    logger.propagate = False
    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Module logger under the ``pmdlint`` hierarchy; pass ``__name__``."""
    return logging.getLogger(name)
