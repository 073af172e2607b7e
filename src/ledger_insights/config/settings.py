"""Configuration settings for the insight pipeline."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Flat settings read from environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Ollama
    ollama_base_url: str = Field(
        default="http://localhost:11434", validation_alias="OLLAMA_BASE_URL"
    )
    default_text_model: str = Field(default="llama3.2", validation_alias="DEFAULT_TEXT_MODEL")
    vision_model: str = Field(default="llama3.2-vision", validation_alias="VISION_MODEL")

    # Sampling
    max_tokens: int = Field(default=4096, ge=1, le=32768, validation_alias="LLM_MAX_TOKENS")
    temperature: float = Field(default=0.7, ge=0.0, le=1.0, validation_alias="LLM_TEMPERATURE")
    top_p: float = Field(default=0.9, ge=0.0, le=1.0, validation_alias="LLM_TOP_P")

    # Resilience
    timeout_seconds: int = Field(
        default=120, ge=30, le=600, validation_alias="LLM_TIMEOUT_SECONDS"
    )
    max_retries: int = Field(default=3, ge=0, le=10, validation_alias="LLM_MAX_RETRIES")
    retry_delay_seconds: int = Field(
        default=2, ge=1, le=30, validation_alias="LLM_RETRY_DELAY_SECONDS"
    )

    # Analyses that return a fallback result instead of raising when generation fails
    fallback_analyses: list[str] = Field(
        default_factory=lambda: ["CashFlowOptimization"],
        validation_alias="FALLBACK_ANALYSES",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", validation_alias="LOG_LEVEL"
    )
    log_format: Literal["json", "console"] = Field(
        default="console", validation_alias="LOG_FORMAT"
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
