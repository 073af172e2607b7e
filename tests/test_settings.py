"""Tests for configuration settings."""

import pytest
from pydantic import ValidationError

from ledger_insights.config.settings import Settings, get_settings


def test_settings_has_defaults(monkeypatch):
    """Test that settings has sensible defaults."""
    for name in ("OLLAMA_BASE_URL", "DEFAULT_TEXT_MODEL", "LLM_MAX_RETRIES", "FALLBACK_ANALYSES"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.ollama_base_url == "http://localhost:11434"
    assert settings.default_text_model == "llama3.2"
    assert settings.vision_model == "llama3.2-vision"
    assert settings.max_tokens == 4096
    assert settings.timeout_seconds == 120
    assert settings.max_retries == 3
    assert settings.retry_delay_seconds == 2
    assert settings.fallback_analyses == ["CashFlowOptimization"]


def test_settings_loads_from_env(monkeypatch):
    """Test that settings reads flat environment variables."""
    monkeypatch.setenv("OLLAMA_BASE_URL", "http://gpu-box:11434")
    monkeypatch.setenv("DEFAULT_TEXT_MODEL", "qwen2.5:8b")
    monkeypatch.setenv("LLM_MAX_RETRIES", "5")
    monkeypatch.setenv("FALLBACK_ANALYSES", '["CashFlowOptimization", "HealthCheck"]')

    settings = Settings(_env_file=None)

    assert settings.ollama_base_url == "http://gpu-box:11434"
    assert settings.default_text_model == "qwen2.5:8b"
    assert settings.max_retries == 5
    assert settings.fallback_analyses == ["CashFlowOptimization", "HealthCheck"]


def test_settings_fields():
    """Test the model options are exactly the ones the client reads."""
    model_fields = {name for name in Settings.model_fields if name.endswith("_model")}

    assert model_fields == {"default_text_model", "vision_model"}


def test_unknown_env_vars_ignored(monkeypatch):
    monkeypatch.setenv("ALTERNATIVE_MODEL", "qwen2.5:8b")

    settings = Settings(_env_file=None)

    assert not hasattr(settings, "alternative_model")


def test_settings_accepts_field_names():
    """Test that settings can be built in code by field name."""
    settings = Settings(_env_file=None, max_retries=1, timeout_seconds=45)

    assert settings.max_retries == 1
    assert settings.timeout_seconds == 45


@pytest.mark.parametrize(
    "overrides",
    [
        {"timeout_seconds": 10},
        {"timeout_seconds": 601},
        {"max_retries": 11},
        {"retry_delay_seconds": 0},
        {"temperature": 1.5},
    ],
)
def test_settings_rejects_out_of_range_values(overrides):
    """Test that bounds are enforced at construction."""
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **overrides)


def test_settings_are_cached():
    """Test that get_settings returns cached instance."""
    get_settings.cache_clear()

    settings1 = get_settings()
    settings2 = get_settings()

    assert settings1 is settings2
