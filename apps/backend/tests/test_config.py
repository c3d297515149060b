"""Tests for configuration helpers."""

import pytest
from pydantic import ValidationError

from userhub.config import Settings, parse_comma_list, parse_key_value_pairs


def test_parse_comma_list_defaults() -> None:
    assert parse_comma_list(None, ["a"]) == ["a"]


def test_parse_comma_list_accepts_list() -> None:
    assert parse_comma_list(["x", "y"], ["a"]) == ["x", "y"]


def test_parse_comma_list_splits_string() -> None:
    assert parse_comma_list("x, y, ,z", ["a"]) == ["x", "y", "z"]


def test_parse_key_value_pairs_skips_malformed_items() -> None:
    assert parse_key_value_pairs("a=1, b = 2,broken,=3,c=") == {"a": "1", "b": "2"}
    assert parse_key_value_pairs(None) == {}


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("REPOSITORY_BACKEND", "sql")
    monkeypatch.setenv("SEED_DEMO_USERS", "true")
    monkeypatch.setenv("ENV", "staging")
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test,http://b.test")

    settings = Settings(_env_file=None)

    assert settings.uses_sql_backend is True
    assert settings.seed_demo_users is True
    assert settings.environment == "staging"
    assert settings.port == 8080
    assert settings.cors_origins == ["http://a.test", "http://b.test"]


def test_settings_defaults(monkeypatch) -> None:
    for name in ("REPOSITORY_BACKEND", "CORS_ORIGINS", "PORT", "HOST"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.repository_backend == "memory"
    assert settings.uses_sql_backend is False
    assert settings.port == 3000
    assert settings.host == "0.0.0.0"
    assert "http://localhost:3000" in settings.cors_origins


def test_settings_reject_unknown_backend(monkeypatch) -> None:
    monkeypatch.setenv("REPOSITORY_BACKEND", "redis")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
