from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MPAGS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    # Chunked pipeline
    worker_count: int = Field(default=4, ge=1)
    poll_interval_seconds: float = Field(default=1.0, gt=0.0)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
