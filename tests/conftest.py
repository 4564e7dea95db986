"""Shared fixtures for tollgate tests."""

import logging

import pytest

from tollgate.config import get_settings


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch, tmp_path):
    """Run every test with default settings and no stray .env file."""
    for var in (
        "TOLLGATE_LOG_LEVEL",
        "TOLLGATE_LOG_DIR",
        "TOLLGATE_LOG_JSON",
        "TOLLGATE_RULES_FILE",
        "TOLLGATE_PROJECT_DIR_NAME",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def project_dir(tmp_path):
    """Create a project directory with a .tollgate folder."""
    proj = tmp_path / "project"
    (proj / ".tollgate").mkdir(parents=True)
    return proj


@pytest.fixture
def fresh_logger():
    """Yield a logger name with no handlers, cleaned up afterwards."""
    name = "tollgate.tests.fresh"
    logger = logging.getLogger(name)
    logger.handlers.clear()
    yield name
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
