"""
Tests for settings and logging setup.
"""
import json
import logging

import pytest

from govaudit.analyzers.call_analyzer import Penalties
from govaudit.config import LogLevel, get_settings
from govaudit.exceptions import ConfigurationError
from govaudit.utils.logger import get_logger, setup_logger


class TestSettings:
    """Test cases for environment-driven settings."""

    def test_defaults(self):
        settings = get_settings()
        assert settings.LOG_LEVEL is LogLevel.WARNING
        assert settings.JSON_LOGS is False
        assert Penalties.from_settings(settings) == Penalties(10, 5, 5)

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("GOVAUDIT_LOG_LEVEL", "debug")
        monkeypatch.setenv("GOVAUDIT_VALUE_PENALTY", "7")
        settings = get_settings()
        assert settings.LOG_LEVEL is LogLevel.DEBUG
        assert settings.log_level_value == logging.DEBUG
        assert settings.VALUE_PENALTY == 7

    def test_invalid_override(self, monkeypatch):
        monkeypatch.setenv("GOVAUDIT_PAYABLE_PENALTY", "-1")
        with pytest.raises(ConfigurationError):
            get_settings()


class TestLogger:
    """Test cases for setup_logger."""

    def test_json_logs(self, capsys):
        logger = setup_logger(log_level="INFO", json_format=True)
        get_logger("analyzers.test").info("indexed")

        record = json.loads(capsys.readouterr().err.strip())
        assert record["message"] == "indexed"
        assert record["logger"] == "govaudit.analyzers.test"
        assert record["level"] == "INFO"
        assert logger.propagate is False

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "govaudit.log"
        setup_logger(log_level="WARNING", log_file=log_file)
        get_logger().warning("collision")
        for handler in get_logger().handlers:
            handler.flush()
        assert "collision" in log_file.read_text(encoding="utf-8")

    def test_stdout_untouched(self, capsys):
        setup_logger(log_level="DEBUG")
        get_logger("cli").debug("noise")
        assert capsys.readouterr().out == ""
