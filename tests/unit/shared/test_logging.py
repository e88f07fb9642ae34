"""Tests for logging configuration."""

import logging

import pytest

from crud_e2e.shared.logging import configure_logging, get_logger


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Put the root logger back after each test."""
    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_default_level_is_warning(self):
        """Test diagnostics are hidden by default."""
        configure_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_debug_level(self):
        """Test --verbose enables debug diagnostics."""
        configure_logging("debug")
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_warning(self):
        """Test an unknown level name is treated as warning."""
        configure_logging("chatty")
        assert logging.getLogger().level == logging.WARNING

    def test_transport_loggers_stay_quiet(self):
        """Test httpx logging stays at warning even when debugging."""
        configure_logging("debug")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_debug_events_reach_stderr(self, capsys):
        """Test structlog events are rendered to stderr, not stdout."""
        configure_logging("debug")
        get_logger("crud_e2e.test").debug("scenario_start", scenario=3)

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "scenario_start" in captured.err
        assert "scenario=3" in captured.err
