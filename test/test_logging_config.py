"""
Unit tests for LoggingConfig
"""

import logging
import logging.handlers

import pytest
from vrf_sizing.core.logging_config import LoggingConfig


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Restore root logger handlers and level after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLoggingConfig:
    """Test handler setup and level changes."""

    def test_console_only(self):
        root = LoggingConfig.setup_logging("WARNING")
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_rotating_file_handler(self, tmp_path):
        root = LoggingConfig.setup_logging("DEBUG", log_dir=str(tmp_path / "logs"))
        file_handlers = [h for h in root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]

        assert len(file_handlers) == 1
        assert (tmp_path / "logs" / "vrf_sizing.log").exists()

    def test_set_log_level(self):
        LoggingConfig.setup_logging("INFO")
        LoggingConfig.set_log_level("error")
        assert logging.getLogger().level == logging.ERROR

    def test_invalid_level_raises(self):
        with pytest.raises(ValueError):
            LoggingConfig.setup_logging("LOUD")
