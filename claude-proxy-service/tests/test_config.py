"""Tests for environment-driven settings."""

import httpx
import pytest

from config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PORT", "UPSTREAM_URL", "UPSTREAM_TIMEOUT_SECONDS", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.port == 3000
    assert settings.upstream_url == "https://api.anthropic.com/v1/messages"
    assert settings.anthropic_version == "2023-06-01"
    assert settings.upstream_timeout_seconds == 25.0
    assert settings.max_body_bytes == 10 * 1024 * 1024
    assert not settings.is_production


def test_port_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "8080")

    assert Settings(_env_file=None).port == 8080


def test_timeout_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UPSTREAM_TIMEOUT_SECONDS", "3.5")

    settings = Settings(_env_file=None)

    assert settings.upstream_timeout_seconds == 3.5
    assert settings.upstream_timeout == httpx.Timeout(3.5)


def test_is_production_ignores_case(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "Production")

    assert Settings(_env_file=None).is_production
