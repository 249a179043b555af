"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # UI
    ui_origin: str = "http://localhost:8501"

    # OpenAI
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o"
    openai_max_tokens: int = 1000

    # Upstream generation timeout (seconds)
    openai_timeout_seconds: float = 30.0

    # Password hashing cost factor (bcrypt accepts 4-31)
    bcrypt_rounds: int = 10

    # Sessions
    session_cookie_name: str = "sid"
    session_ttl_hours: int = 24
    session_cookie_secure: bool = False

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
