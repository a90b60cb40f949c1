"""Tests for configure_logging()."""

import logging
from logging.handlers import RotatingFileHandler

from shellrack.models.config import LogRotationConfig
from shellrack.utils.logging_utils import configure_logging


def test_stream_handler_by_default():
    """Without a log file, logs go to a single stream handler."""
    app_logger = configure_logging("info")

    assert app_logger.level == logging.INFO
    assert app_logger.propagate is False
    assert len(app_logger.handlers) == 1
    assert type(app_logger.handlers[0]) is logging.StreamHandler


def test_reconfiguring_does_not_stack_handlers():
    """Calling configure_logging twice leaves one handler."""
    configure_logging("INFO")
    app_logger = configure_logging("DEBUG")

    assert len(app_logger.handlers) == 1
    assert app_logger.level == logging.DEBUG


def test_rotating_file_handler(tmp_path):
    """A log file uses a RotatingFileHandler with the configured limits."""
    log_file = tmp_path / "logs" / "shellrack.log"

    app_logger = configure_logging(
        "INFO", log_file, LogRotationConfig(max_size_mb=2, backup_count=4)
    )
    logging.getLogger("shellrack.store.core").info("hello")

    (handler,) = app_logger.handlers
    assert isinstance(handler, RotatingFileHandler)
    assert handler.maxBytes == 2 * 1024 * 1024
    assert handler.backupCount == 4
    handler.flush()
    assert "hello" in log_file.read_text()


def test_rotation_disabled(tmp_path):
    """Disabled rotation uses a plain FileHandler."""
    app_logger = configure_logging(
        "WARNING", tmp_path / "shellrack.log", LogRotationConfig(enabled=False)
    )

    (handler,) = app_logger.handlers
    assert type(handler) is logging.FileHandler


def test_unknown_level_defaults_to_warning():
    """An unrecognised level name falls back to WARNING."""
    assert configure_logging("chatty").level == logging.WARNING
