"""
Tests for environment-driven settings.
"""

import pytest
from pydantic import ValidationError

from reqdoc.config import ReqdocSettings
from reqdoc.core.types import DEFAULT_CONCURRENT_REQUESTS, DEFAULT_MAX_CHUNK_SIZE


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep a developer's .env or REQDOC_* variables out of the tests."""
    monkeypatch.chdir(tmp_path)
    for name in ("MODEL", "MAX_CHUNK_SIZE", "CONCURRENT_REQUESTS", "RATE_LIMIT_DELAY_MS"):
        monkeypatch.delenv(f"REQDOC_{name}", raising=False)


def test_defaults():
    settings = ReqdocSettings()

    assert settings.model is None
    assert settings.max_chunk_size == DEFAULT_MAX_CHUNK_SIZE
    assert settings.concurrent_requests == DEFAULT_CONCURRENT_REQUESTS
    assert settings.rate_limit_delay_ms == 1000
    assert settings.allow_partial is False
    assert settings.max_tokens is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("REQDOC_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("REQDOC_MAX_CHUNK_SIZE", "4000")
    monkeypatch.setenv("REQDOC_CONCURRENT_REQUESTS", "2")

    settings = ReqdocSettings()

    assert settings.model == "gpt-4o-mini"
    assert settings.max_chunk_size == 4000
    assert settings.concurrent_requests == 2


def test_dotenv_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("REQDOC_RATE_LIMIT_DELAY_MS=250\n", encoding="utf-8")

    assert ReqdocSettings().rate_limit_delay_ms == 250


def test_pipeline_config_converts_delay_to_seconds():
    config = ReqdocSettings(
        max_chunk_size=500,
        concurrent_requests=3,
        rate_limit_delay_ms=250,
    ).pipeline_config()

    assert config.max_chunk_size == 500
    assert config.concurrent_requests == 3
    assert config.rate_limit_delay == 0.25


def test_invalid_limits_rejected():
    with pytest.raises(ValidationError):
        ReqdocSettings(max_chunk_size=0)
    with pytest.raises(ValidationError):
        ReqdocSettings(rate_limit_delay_ms=-1)
