"""Unit tests for environment settings and logging setup."""

from __future__ import annotations

import logging

import pytest

from proofcount.observability.logging import configure_logging
from proofcount.settings import Settings, get_settings


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def connector_logger():
    logger = logging.getLogger("databricks.sql")
    original = logger.level
    yield logger
    logger.setLevel(original)


def test_from_env_reads_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("STORE_LOCKING", "false")

    settings = Settings.from_env()

    assert settings.port == 8080
    assert settings.cors_allow_origins == ("https://a.example", "https://b.example")
    assert settings.store_locking is False


def test_get_settings_is_cached(fresh_settings, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    first = get_settings()
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    assert get_settings() is first
    assert first.log_level == "WARNING"


def test_connector_logger_quiet_unless_debugging(connector_logger):
    configure_logging("info")
    assert connector_logger.level == logging.WARNING

    configure_logging("DEBUG")
    assert connector_logger.level == logging.DEBUG
