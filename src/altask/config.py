"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings so the few runtime knobs of altask can be set
without code changes:

  ALTASK_SYNC_ERRORS=raise            let computation exceptions escape fork()
  ALTASK_LOG_LEVEL=DEBUG              level used by configure_structlog()
  ALTASK_TRACE_FORKS=true             emit a debug event for every fork
  ALTASK_AWAIT_TIMEOUT_SECONDS=5      default timeout for to_awaitable()

Settings are read once and cached; call ``get_settings.cache_clear()``
after changing the environment.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AltaskSettings(BaseSettings):
    """
    Library settings.

    Load order (highest priority first):
      1. Environment variables (ALTASK_ prefix)
      2. .env file in the working directory
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="ALTASK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    sync_errors: Literal["reject", "raise"] = Field(
        default="reject",
        description="What fork() does when a computation raises before settling",
    )
    log_level: str = Field(default="INFO")
    trace_forks: bool = Field(default=False)
    await_timeout_seconds: float = Field(
        default=0,
        ge=0,
        description="Default timeout for to_awaitable(); 0 waits forever",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept only the standard logging level names (case-insensitive)."""
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> AltaskSettings:
    """Return the process-wide settings instance."""
    return AltaskSettings()
