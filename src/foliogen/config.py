"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "FolioGen API"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # API
    api_v1_prefix: str = "/api/v1"

    # Generative AI (Gemini)
    gemini_api_key: SecretStr | None = None
    gemini_model_fast: str = "gemini-flash-lite-latest"
    gemini_model: str = "gemini-flash-lite-latest"

    # AI call policy
    ai_retry_max_attempts: int = Field(default=3, ge=1)
    ai_retry_initial_delay: float = Field(default=1.0, ge=0)  # seconds
    ai_retry_backoff_multiplier: float = Field(default=2.0, ge=1)
    ai_timeout_fast: float = 10.0
    ai_timeout_standard: float = 30.0
    ai_timeout_extended: float = 60.0

    # Chat assistant (OpenRouter, OpenAI-compatible)
    openrouter_api_key: SecretStr | None = None
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    chat_model: str = "kwaipilot/kat-coder-pro:free"
    chat_temperature: float = 0.7
    chat_max_tokens: int = 500
    chat_timeout: float = 30.0

    # GitHub
    github_api_url: str = "https://api.github.com"
    github_token: SecretStr | None = None
    github_timeout: float = 15.0

    # Sharing
    public_base_url: str = "http://localhost:3000"
    share_ttl_days: int = 30

    # CORS
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    @field_validator("public_base_url", "github_api_url", "openrouter_base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Base URLs are joined with paths, so drop any trailing slash."""
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @property
    def has_ai_credentials(self) -> bool:
        """Check if a generative AI key is configured."""
        return bool(self.gemini_api_key and self.gemini_api_key.get_secret_value().strip())

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
