"""Configuration management for tileset-tools.

Settings are read from environment variables (prefix ``TILESET_``) and an
optional ``.env`` file. Explicit function arguments always take precedence
over these values.

Environment variables:
    TILESET_ROOT_JSON         -> root_json         (default: "tileset.json")
    TILESET_COPY_CONCURRENCY  -> copy_concurrency  (default: 1024)
    TILESET_LOG_LEVEL         -> log_level         (default: "INFO")
    TILESET_LOG_FORMAT        -> log_format        (default: "console")
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
VALID_LOG_FORMATS = {"console", "json"}


class Settings(BaseSettings):
    """Runtime settings for tileset-tools."""

    model_config = SettingsConfigDict(
        env_prefix="TILESET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    root_json: str = Field(
        default="tileset.json",
        description="Root manifest path, relative to the input directory",
    )
    copy_concurrency: int = Field(
        default=1024,
        ge=1,
        description="Maximum number of file copies in flight",
    )
    log_level: str = "INFO"
    log_format: str = "console"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(VALID_LOG_LEVELS)}, got {value!r}")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, value: str) -> str:
        fmt = value.lower()
        if fmt not in VALID_LOG_FORMATS:
            raise ValueError(f"log_format must be one of {sorted(VALID_LOG_FORMATS)}, got {value!r}")
        return fmt


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings (cached).

    Call ``get_settings.cache_clear()`` to pick up environment changes.
    """
    return Settings()
