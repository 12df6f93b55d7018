"""Tests for logging infrastructure."""

from __future__ import annotations

import logging
from pathlib import Path

from renpy_transcoder.log import setup_logging
from renpy_transcoder.project import load_script


def _clear_logger() -> None:
    """Remove all handlers from the renpy_transcoder logger so each test starts fresh."""
    logger = logging.getLogger("renpy_transcoder")
    logger.handlers.clear()


def test_setup_logging_creates_stderr_handler():
    _clear_logger()
    setup_logging()
    logger = logging.getLogger("renpy_transcoder")
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert logger.level == logging.WARNING
    _clear_logger()


def test_setup_logging_verbose_sets_debug():
    _clear_logger()
    setup_logging(verbose=True)
    logger = logging.getLogger("renpy_transcoder")
    assert logger.level == logging.DEBUG
    _clear_logger()


def test_setup_logging_none_sets_info():
    _clear_logger()
    setup_logging(verbose=None)
    assert logging.getLogger("renpy_transcoder").level == logging.INFO
    _clear_logger()


def test_setup_logging_with_log_file(tmp_path):
    _clear_logger()
    log_file = str(tmp_path / "test.log")
    setup_logging(log_file=log_file)
    logger = logging.getLogger("renpy_transcoder")
    assert len(logger.handlers) == 2
    assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)
    logger.warning("test message")
    for h in logger.handlers:
        h.flush()
    content = Path(log_file).read_text(encoding="utf-8")
    assert "test message" in content
    _clear_logger()


def test_setup_logging_idempotent():
    _clear_logger()
    setup_logging()
    setup_logging()  # second call should be a no-op
    logger = logging.getLogger("renpy_transcoder")
    assert len(logger.handlers) == 1
    _clear_logger()


def test_setup_logging_second_call_relevels_handlers():
    _clear_logger()
    setup_logging()
    setup_logging(verbose=True)
    logger = logging.getLogger("renpy_transcoder")
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.handlers[0].level == logging.DEBUG
    _clear_logger()


def test_project_loader_logs_info(tmp_path, caplog):
    _clear_logger()
    path = tmp_path / "script.rpy"
    path.write_text('label start:\n    "Hello"\n', encoding="utf-8")
    with caplog.at_level(logging.INFO, logger="renpy_transcoder.project"):
        load_script(path)
    assert any("script.rpy" in r.getMessage() and "2 element(s)" in r.getMessage() for r in caplog.records)
