from __future__ import annotations

import logging

from jobsite.services.config import Settings
from jobsite.services.logger import get_logger, setup_logging


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("RECENT_ACTIVITY_LIMIT", "3")
    monkeypatch.setenv("FRONTEND_URL", "http://portal.example.com")

    settings = Settings(_env_file=None)

    assert settings.log_level == "DEBUG"
    assert settings.recent_activity_limit == 3
    assert settings.allowed_origins[0] == "http://portal.example.com"
    assert settings.resolved_log_file is None


def test_loggers_are_namespaced() -> None:
    assert get_logger("reporting").name == "jobsite.reporting"
    assert get_logger("jobsite.store").name == "jobsite.store"


def test_setup_logging_writes_file(tmp_path) -> None:
    log_file = tmp_path / "logs" / "jobsite.log"
    setup_logging("DEBUG", log_file)
    try:
        get_logger("test").debug("report ran")
        for handler in logging.getLogger("jobsite").handlers:
            handler.flush()

        assert "jobsite.test: report ran" in log_file.read_text(encoding="utf-8")
    finally:
        setup_logging("INFO")
