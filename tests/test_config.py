"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from pos_api.core.config import EnvironmentMode, Settings, get_settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("API_PORT", raising=False)
    monkeypatch.delenv("ENV_MODE", raising=False)

    settings = Settings(_env_file=None)

    assert settings.api_port == 3000
    assert settings.database_url.startswith("postgresql+psycopg://")
    assert settings.env_mode == EnvironmentMode.DEVELOPMENT
    assert settings.is_development
    assert not settings.is_production


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg://pos:pos@db:5432/pos")
    monkeypatch.setenv("API_PORT", "8080")
    monkeypatch.setenv("ENV_MODE", "PRODUCTION")
    monkeypatch.setenv("DB_POOL_SIZE", "20")

    settings = Settings(_env_file=None)

    assert settings.database_url == "postgresql+psycopg://pos:pos@db:5432/pos"
    assert settings.api_port == 8080
    assert settings.is_production
    assert settings.db_pool_size == 20


def test_invalid_env_mode_rejected(monkeypatch):
    monkeypatch.setenv("ENV_MODE", "qa")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_cors_origins_list():
    settings = Settings(_env_file=None, cors_origins="http://a.local, http://b.local,")

    assert settings.cors_origins_list == ["http://a.local", "http://b.local"]


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
