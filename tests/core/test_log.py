"""Unit tests for core logging functionality."""

import logging

import colorlog

from core import get_logger, setup_logging, setup_test_logging


def test_setup_logging_defaults() -> None:
    """Test setup_logging with default parameters."""
    setup_logging()
    root_logger = logging.getLogger()
    assert root_logger.level == logging.INFO


def test_setup_logging_custom_level() -> None:
    """Test setup_logging with custom level."""
    setup_logging(level=logging.DEBUG)
    root_logger = logging.getLogger()
    assert root_logger.level == logging.DEBUG


def test_setup_logging_level_name() -> None:
    """Test levels given by name, as settings store them."""
    setup_logging(level="warning")
    assert logging.getLogger().level == logging.WARNING

    setup_logging(level="not-a-level")
    assert logging.getLogger().level == logging.INFO


def test_console_handler_uses_colors() -> None:
    """Test the console formatter."""
    setup_logging(use_colors=True)
    handler = logging.getLogger().handlers[0]
    assert isinstance(handler.formatter, colorlog.ColoredFormatter)

    setup_logging(use_colors=False)
    handler = logging.getLogger().handlers[0]
    assert not isinstance(handler.formatter, colorlog.ColoredFormatter)


def test_noisy_loggers_are_quieted() -> None:
    """Test HTTP client loggers do not log every request."""
    setup_logging(level=logging.DEBUG)
    assert logging.getLogger("httpx").level == logging.WARNING


def test_file_logging(tmp_path) -> None:
    """Test the file handler writes into the log directory."""
    setup_logging(enable_file_logging=True, log_dir=tmp_path)
    get_logger("test_file").info("written to file")

    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "written to file" in (tmp_path / "watchpost.log").read_text()

    setup_test_logging()


def test_get_logger() -> None:
    """Test get_logger returns a logger instance."""
    logger = get_logger("test_logger")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "test_logger"
