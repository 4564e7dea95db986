"""Tests for settings and the logger utility."""

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from tollgate.config import Settings, get_settings
from tollgate.utils.logger import JsonFormatter, get_logger


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.log_level == "INFO"
        assert settings.log_dir is None
        assert settings.log_json is False
        assert settings.rules_file == "tollgate.yaml"
        assert settings.project_dir_name == ".tollgate"

    def test_env_prefix(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TOLLGATE_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("TOLLGATE_LOG_DIR", str(tmp_path / "logs"))
        settings = Settings()
        assert settings.log_level == "DEBUG"
        assert settings.log_dir == Path(tmp_path / "logs")

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()


class TestGetLogger:
    def test_console_only_without_log_dir(self, fresh_logger):
        logger = get_logger(fresh_logger)
        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.WARNING
        assert logger.level == logging.INFO

    def test_handlers_attached_once(self, fresh_logger):
        get_logger(fresh_logger)
        logger = get_logger(fresh_logger)
        assert len(logger.handlers) == 1

    def test_explicit_level(self, fresh_logger):
        assert get_logger(fresh_logger, level=logging.ERROR).level == logging.ERROR

    def test_file_handlers(self, fresh_logger, monkeypatch, tmp_path):
        log_dir = tmp_path / "logs"
        monkeypatch.setenv("TOLLGATE_LOG_DIR", str(log_dir))
        monkeypatch.setenv("TOLLGATE_LOG_JSON", "true")
        get_settings.cache_clear()

        logger = get_logger(fresh_logger)
        files = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
        assert len(files) == 3
        assert log_dir.is_dir()

        logger.info("admitted")
        for handler in files:
            handler.flush()
        assert "admitted" in (log_dir / "tollgate.log").read_text()
        record = json.loads((log_dir / "tollgate.json").read_text().splitlines()[0])
        assert record["message"] == "admitted"
        assert record["level"] == "INFO"


class TestJsonFormatter:
    def test_format(self):
        record = logging.LogRecord("tollgate", logging.WARNING, __file__, 1, "skip %s", ("x",), None)
        data = json.loads(JsonFormatter().format(record))
        assert data["message"] == "skip x"
        assert data["logger"] == "tollgate"
        assert "timestamp" in data
