#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for CLI logging configuration."""

import logging

import pytest

from texctx.logging_utils import configure_logging


@pytest.fixture
def saved_logging():
    """Restore the root and pylatexenc loggers after each test."""
    root = logging.getLogger()
    pylatexenc_logger = logging.getLogger("pylatexenc")
    handlers = list(root.handlers)
    level = root.level
    pylatexenc_level = pylatexenc_logger.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    pylatexenc_logger.setLevel(pylatexenc_level)


@pytest.mark.unit
@pytest.mark.usefixtures("saved_logging")
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_level_by_name(self):
        """Test that level names are resolved case-insensitively."""
        root = configure_logging("debug")

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

    def test_unknown_level_falls_back_to_info(self):
        """Test the default for unrecognised names."""
        assert configure_logging("chatty").level == logging.INFO

    def test_pylatexenc_quieted(self):
        """Test that parser warnings are silenced unless debugging."""
        configure_logging(logging.WARNING)
        assert logging.getLogger("pylatexenc").level == logging.ERROR

    def test_log_file(self, tmp_path):
        """Test teeing log output to a file."""
        log_file = tmp_path / "texctx.log"

        root = configure_logging("INFO", log_file=str(log_file), trace_mode=True)
        logging.getLogger("texctx.test").info("hello")
        for handler in root.handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "[INFO] [texctx.test] hello" in content
        assert len(root.handlers) == 2

    def test_unwritable_log_file(self, tmp_path):
        """Test that a bad log path keeps console logging only."""
        root = configure_logging("INFO", log_file=str(tmp_path / "missing" / "texctx.log"))

        assert len(root.handlers) == 1
