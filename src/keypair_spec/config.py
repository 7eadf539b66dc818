"""
Configuration: typed, validated settings loaded from environment/.env.

Uses pydantic-settings to:
  - Load from environment variables
  - Fall back to a .env file at the project root
  - Validate types and constraints when settings are loaded

Only AppSettings is a BaseSettings instance. RequestDefaults is a plain
BaseModel populated through env_nested_delimiter="__", so the env var
DEFAULTS__VALIDITY_DAYS maps to defaults.validity_days.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_FILE = Path(__file__).parent.parent.parent / ".env"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class RequestDefaults(BaseModel):
    """
    Values RequestBuilder.from_defaults pre-populates a builder with.

    Alias and subject identify a specific credential and have no default.
    """

    validity_days: int = Field(
        default=365,
        ge=1,
        description="Length of the self-signed certificate validity window in days",
    )
    encryption_required: bool = Field(
        default=False,
        description="Require generated keys to be encrypted at rest",
    )
    random_serial: bool = Field(
        default=True,
        description="Assign a random positive serial number",
    )


class AppSettings(BaseSettings):
    """
    Root settings.

    Load order (highest priority first):
      1. Environment variables
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    defaults: RequestDefaults = Field(default_factory=lambda: RequestDefaults())
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False, description="Render log events as JSON lines")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize to upper case and reject names the logging module doesn't know."""
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(_LOG_LEVELS)}, got {value!r}"
            )
        return level
