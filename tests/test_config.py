"""Tests for environment driven settings."""

import pytest
from pydantic import ValidationError

from relay.config import Settings, get_settings, reset_settings_cache


def test_defaults_match_relay_expectations() -> None:
    settings = Settings(secret_key="s")

    assert settings.auth_cookie_name == "auth_token"
    assert settings.dedup_ledger_capacity == 1000
    assert settings.dedup_ledger_eviction == 100
    assert settings.cors_origins == ["*"]
    assert settings.push_enabled is False


def test_origins_are_split_on_commas() -> None:
    settings = Settings(secret_key="s", allowed_origins="https://a.example, https://b.example,")

    assert settings.cors_origins == ["https://a.example", "https://b.example"]


def test_eviction_cannot_exceed_capacity() -> None:
    with pytest.raises(ValidationError):
        Settings(secret_key="s", dedup_ledger_capacity=10, dedup_ledger_eviction=20)


def test_settings_are_read_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("DEDUP_LEDGER_CAPACITY", "50")
    monkeypatch.setenv("DEDUP_LEDGER_EVICTION", "5")
    reset_settings_cache()
    try:
        settings = get_settings()
        assert settings.dedup_ledger_capacity == 50
        assert settings.dedup_ledger_eviction == 5
        assert get_settings() is settings
    finally:
        reset_settings_cache()
