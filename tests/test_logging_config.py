# tests/test_logging_config.py
"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from ragdesk.logging_config import NOISY_LOGGERS, configure_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestConfigureLogging:
    def test_rich_handler_by_default(self):
        configure_logging("INFO")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], RichHandler)
        assert root.level == logging.INFO

    def test_plain_handler(self):
        configure_logging("DEBUG", plain=True)
        root = logging.getLogger()
        assert not isinstance(root.handlers[0], RichHandler)
        assert root.level == logging.DEBUG

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("RAGDESK_LOG_LEVEL", "error")
        configure_logging()
        assert logging.getLogger().level == logging.ERROR

    def test_default_level(self, monkeypatch):
        monkeypatch.delenv("RAGDESK_LOG_LEVEL", raising=False)
        configure_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back(self):
        configure_logging("chatty")
        assert logging.getLogger().level == logging.WARNING

    def test_repeated_calls_do_not_stack_handlers(self):
        configure_logging("INFO")
        configure_logging("INFO")
        assert len(logging.getLogger().handlers) == 1

    def test_noisy_loggers_quieted(self):
        configure_logging("DEBUG")
        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level >= logging.WARNING
