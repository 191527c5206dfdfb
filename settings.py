"""
Suite configuration using Pydantic Settings.

Every setting can be overridden with an "API_" prefixed environment variable
or a .env file in the working directory:

    API_BASE_URL        target host (unset → https://dummyjson.com, or the mock under pytest)
    API_TIMEOUT         per-request timeout in seconds
    API_MAX_RETRIES     attempts per request on transport errors
    API_CLIENT_BACKEND  "httpx" or "requests"
    API_LOG_LEVEL       logging level name
"""
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """DummyJSON suite configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="API_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )

    base_url: Optional[str] = Field(default=None, description="Override for the API host")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    max_retries: int = Field(default=1, ge=1, description="Attempts per request on transport errors")
    client_backend: str = Field(default="httpx", description="HTTP client library")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        return v.rstrip("/") if v else None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the allowed values."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v


def get_settings() -> Settings:
    """Reads the environment on every call, so overrides made at runtime are honoured."""
    return Settings()
