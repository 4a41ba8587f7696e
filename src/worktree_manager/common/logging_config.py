"""Logging configuration for worktree-manager."""

from __future__ import annotations

import logging
import sys


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name when writing to a terminal."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        if sys.stderr.isatty() and record.levelname in self.COLORS:
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logging(*, verbose: bool = False) -> None:
    """Configure the package logger.

    Args:
        verbose: If True, show DEBUG messages (every git invocation)
    """
    level = logging.DEBUG if verbose else logging.WARNING

    logger = logging.getLogger("worktree_manager")
    logger.setLevel(level)

    # Remove handlers from a previous invocation in the same process
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    fmt = "%(levelname)s [%(name)s] %(message)s" if verbose else "%(levelname)s %(message)s"
    handler.setFormatter(ColoredFormatter(fmt=fmt))
    logger.addHandler(handler)
