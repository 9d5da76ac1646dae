"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables or .env (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - Blank provider keys are normalized to None (treated as "not configured")

Design Decisions:
    - Provider keys are optional: the service still starts without them and
      answers with the fallback guidance message
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.domain_types import AIProvider


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    environment: str = "development"

    # Provider selection
    ai_provider: AIProvider = AIProvider.OPENAI

    openai_api_key: str | None = None
    openai_model: str = "gpt-3.5-turbo"

    mistral_api_key: str | None = None
    mistral_model: str = "mistral-medium-latest"

    anthropic_api_key: str | None = None
    anthropic_model: str = "claude-3-5-haiku-latest"

    @field_validator(
        "openai_api_key", "mistral_api_key", "anthropic_api_key", "api_key",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("ai_provider", mode="before")
    @classmethod
    def normalize_provider(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    # LLM call parameters
    llm_temperature: float = 0.7
    llm_max_tokens: int = 800
    llm_timeout_seconds: int = 30
    llm_max_retries: int = 2
    llm_base_delay_ms: int = 1000
    llm_max_delay_ms: int = 10_000

    prompt_max_length: int = 10_000

    # API
    api_key: str | None = None
    rate_limit_enabled: bool = True
    rate_limit: str = "100 per 15 minutes"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
