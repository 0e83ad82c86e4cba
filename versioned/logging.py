"""Logging setup for the versioned command line."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "versioned"
_CONSOLE_FORMAT = "[versioned] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return `versioned.<name>`, or the package logger when `name` is empty."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def _level(verbose: bool, silent: bool) -> int:
    # --verbose wins over --silent; errors are shown either way.
    if verbose:
        return logging.DEBUG
    if silent:
        return logging.WARNING
    return logging.INFO


def configure_logging(
    *, verbose: bool = False, silent: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send versioned log records to stderr and, with `log_file`, to that file."""
    level = _level(verbose, silent)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # main() may run several times in one process (tests).
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    sinks: list[tuple[logging.Handler, str]] = [(logging.StreamHandler(), _CONSOLE_FORMAT)]
    if log_file is not None:
        sinks.append((logging.FileHandler(log_file, encoding="utf-8"), _FILE_FORMAT))
    for handler, fmt in sinks:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)
    return logger


__all__ = ["configure_logging", "get_logger"]
