"""Application configuration, loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github_token: SecretStr | None = None

    llm_api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("LLM_API_KEY", "GROQ_API_KEY", "llm_api_key"),
    )
    llm_base_url: str = "https://api.groq.com/openai/v1"
    llm_model: str = "llama-3.1-8b-instant"
    llm_temperature: float = 0.5
    llm_max_tokens: int = 300
    llm_timeout_seconds: float = 30.0

    mongo_uri: SecretStr | None = None
    mongo_database: str = "repolens"

    sample_size: int = 15
    fallback_branches: list[str] = ["main", "master"]
    http_timeout_seconds: float = 10.0
    raw_timeout_seconds: float = 5.0

    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
