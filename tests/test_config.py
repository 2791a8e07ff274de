"""Tests for environment-based settings."""

import logging
from pathlib import Path

import pytest

from maas_docs_search.config import Settings
from maas_docs_search.exceptions import ConfigurationError


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test defaults when no environment variables are set."""
    keys = (
        "DOCS_PATH",
        "DOCS_BASE_URL",
        "DOCS_DEFAULT_LIMIT",
        "DOCS_MAX_LIMIT",
        "DOCS_SCAN_TIMEOUT",
        "DOCS_CACHE_DOCUMENTS",
        "DOCS_API_PORT",
    )
    for key in keys:
        monkeypatch.delenv(key, raising=False)

    settings = Settings()

    assert settings.docs_path == Path("docs")
    assert settings.base_url == "https://docs.lanonasis.com"
    assert settings.default_limit == 10
    assert settings.max_limit == 50
    assert settings.scan_timeout == 0.0
    assert settings.cache_documents is False
    assert settings.api_port == 8000


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Test values are read from the environment."""
    monkeypatch.setenv("DOCS_PATH", str(tmp_path))
    monkeypatch.setenv("DOCS_BASE_URL", "https://docs.example.com/")
    monkeypatch.setenv("DOCS_MAX_LIMIT", "20")
    monkeypatch.setenv("DOCS_SCAN_TIMEOUT", "2.5")
    monkeypatch.setenv("DOCS_CACHE_DOCUMENTS", "true")

    settings = Settings()
    config = settings.search_config()

    assert settings.max_limit == 20
    assert settings.cache_documents is True
    assert config.docs_path == tmp_path
    assert config.base_url == "https://docs.example.com"
    assert config.scan_timeout == 2.5


def test_invalid_numeric_falls_back(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    """Test unparsable numbers log an error and use the default."""
    monkeypatch.setenv("DOCS_MAX_LIMIT", "lots")

    with caplog.at_level(logging.ERROR):
        settings = Settings()

    assert settings.max_limit == 50
    assert "DOCS_MAX_LIMIT" in caplog.text


def test_numeric_below_minimum(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test values below the minimum are clamped."""
    monkeypatch.setenv("DOCS_DEFAULT_LIMIT", "0")
    assert Settings().default_limit == 1


def test_empty_base_url(tmp_path: Path) -> None:
    """Test an empty base URL is a configuration error."""
    settings = Settings(docs_path=tmp_path, base_url="  ")

    with pytest.raises(ConfigurationError):
        settings.search_config()
