"""Application settings via pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Load from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "PolAI Backend"
    service_version: str = "2.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # Primary analysis provider; the rule-based analyzer is always the fallback.
    ai_provider: Literal["mistral", "openai"] = "mistral"
    mistral_api_key: str | None = None
    openai_api_key: str | None = None
    mistral_model: str = "mistral-medium"
    openai_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.2
    llm_timeout_seconds: float = 90.0

    # Documents estimated above this many tokens are analyzed in chunks.
    max_input_tokens: int = 12000
    chunk_delay_seconds: float = 2.0

    batch_max_urls: int = 10
    batch_delay_seconds: float = 2.0
    min_text_length: int = 50

    fetch_retries: int = 3
    fetch_timeout_seconds: float = 30.0
    fetch_min_chars: int = 100
    fetch_use_browser: bool = False


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
