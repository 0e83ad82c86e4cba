"""Tests for versioned.logging."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from versioned.logging import configure_logging, get_logger


def test_get_logger_names() -> None:
    assert get_logger().name == "versioned"
    assert get_logger("sync").name == "versioned.sync"
    assert get_logger("sync").parent is get_logger()


@pytest.mark.parametrize(
    ("verbose", "silent", "level"),
    [
        (False, False, logging.INFO),
        (False, True, logging.WARNING),
        (True, False, logging.DEBUG),
        (True, True, logging.DEBUG),
    ],
)
def test_configure_logging_levels(verbose: bool, silent: bool, level: int) -> None:
    logger = configure_logging(verbose=verbose, silent=silent)
    assert logger.level == level
    assert len(logger.handlers) == 1


def test_configure_logging_file_sink(tmp_path: Path) -> None:
    log_file = tmp_path / "versioned.log"
    configure_logging(log_file=log_file)
    configure_logging(log_file=log_file)
    get_logger("toc").info("table of contents updated")

    logger = get_logger()
    assert len(logger.handlers) == 2
    for handler in logger.handlers:
        handler.flush()
    assert "INFO versioned.toc: table of contents updated" in log_file.read_text(encoding="utf-8")
    configure_logging()
