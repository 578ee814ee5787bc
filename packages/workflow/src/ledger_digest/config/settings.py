"""Configuration settings for the ledger digest workflow."""

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
    )

    # Summarization
    default_max_days_to_process: int = Field(
        default=30,
        ge=0,
        validation_alias="DIGEST_MAX_DAYS_TO_PROCESS",
        description="Trailing window in calendar days when the caller gives none",
    )
    timezone: str = Field(
        default="UTC",
        validation_alias="DIGEST_TIMEZONE",
        description="IANA zone used by the system clock for calendar-day arithmetic",
    )

    # Auditing
    audit_buffer_size: int = Field(
        default=100,
        ge=1,
        validation_alias="DIGEST_AUDIT_BUFFER_SIZE",
        description="Number of audit events kept by the in-memory audit log",
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
