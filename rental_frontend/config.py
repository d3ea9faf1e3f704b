"""Configuration for the rental frontend."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="RENTAL_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Service URLs
    api_url: str = Field(default="http://localhost:5000/api")
    files_url: str = Field(default="http://localhost:5000/uploads")

    # App settings
    app_title: str = "Rental Finder"
    token_session_key: str = "token"

    # Timeouts
    request_timeout: float = 30.0
    connect_timeout: float = 10.0

    # Retries for favorites load (network errors only)
    load_retry_attempts: int = Field(default=3, ge=1)
    load_retry_min_wait: float = Field(default=0.5, ge=0.0)
    load_retry_max_wait: float = Field(default=5.0, ge=0.0)

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
