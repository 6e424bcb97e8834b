from __future__ import annotations

import pytest

from docsum.core.config import DEFAULT_API_BASE, RemoteSettings, load_settings


def test_load_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("DOCSUM_API_BASE", "https://api.example.com/tools/")
    monkeypatch.setenv("DOCSUM_API_TOKEN", "tok")
    monkeypatch.setenv("DOCSUM_APP_ID", "app")
    monkeypatch.setenv("DOCSUM_HTTP_TIMEOUT", "5")
    monkeypatch.setenv("DOCSUM_LOG_LEVEL", "debug")
    monkeypatch.setenv("API_CORS_ORIGINS", "https://a.test, https://b.test")

    settings = load_settings()

    assert settings.remote.api_base == "https://api.example.com/tools"
    assert settings.remote.timeout == 5.0
    assert settings.remote.headers == {
        "Content-Type": "application/json",
        "Authorization": "Bearer tok",
        "X-Generated-App-ID": "app",
    }
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins == ["https://a.test", "https://b.test"]


def test_defaults_when_environment_is_empty(monkeypatch):
    for name in ("DOCSUM_API_BASE", "DOCSUM_API_TOKEN", "DOCSUM_APP_ID", "DOCSUM_HTTP_TIMEOUT", "API_CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.remote.api_base == DEFAULT_API_BASE
    assert settings.remote.timeout == 60.0
    assert settings.cors_origins == ["http://localhost:3000", "http://127.0.0.1:3000"]


def test_api_base_requires_scheme_and_host():
    with pytest.raises(ValueError, match="scheme and host"):
        RemoteSettings(api_base="not-a-url")


def test_invalid_timeout_is_rejected(monkeypatch):
    monkeypatch.setenv("DOCSUM_HTTP_TIMEOUT", "soon")

    with pytest.raises(ValueError, match="DOCSUM_HTTP_TIMEOUT"):
        load_settings()
