"""
Application settings for the time conductor.

This module defines all configuration settings using Pydantic BaseSettings.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.types import Bounds, Deltas, TimeSystemDefaults


class Settings(BaseSettings):
    """Main application settings using Pydantic BaseSettings."""

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    env: str = Field(default="dev", alias="ENV")  # dev|prod|test

    # Local clock tick cadence
    tick_interval_ms: int = Field(default=1000, alias="TICK_INTERVAL_MS", gt=0)

    # Used when a time system supplies no defaults
    fallback_bounds_start: float = Field(default=0, alias="FALLBACK_BOUNDS_START")
    fallback_bounds_end: float = Field(default=0, alias="FALLBACK_BOUNDS_END")
    fallback_deltas_start: float = Field(default=0, alias="FALLBACK_DELTAS_START", ge=0)
    fallback_deltas_end: float = Field(default=0, alias="FALLBACK_DELTAS_END", ge=0)

    # UTC time system defaults (milliseconds)
    utc_window_ms: int = Field(default=30 * 60 * 1000, alias="UTC_WINDOW_MS", ge=0)
    utc_delta_start_ms: int = Field(default=15 * 60 * 1000, alias="UTC_DELTA_START_MS", ge=0)
    utc_delta_end_ms: int = Field(default=0, alias="UTC_DELTA_END_MS", ge=0)

    model_config: SettingsConfigDict = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    def fallback_defaults(self) -> TimeSystemDefaults:
        """Defaults applied when a time system returns none of its own."""
        return TimeSystemDefaults(
            bounds=Bounds(self.fallback_bounds_start, self.fallback_bounds_end),
            deltas=Deltas(self.fallback_deltas_start, self.fallback_deltas_end),
        )


def _resolve_env_file() -> str | None:
    # 1) Explicit override
    explicit = os.getenv("TIMECONDUCTOR_ENV_FILE")
    if explicit and Path(explicit).is_file():
        return explicit

    # 2) CWD .env
    cwd_env = Path.cwd() / ".env"
    if cwd_env.is_file():
        return str(cwd_env)
    return None


_env_file = _resolve_env_file()
settings = Settings(_env_file=_env_file) if _env_file else Settings()  # type: ignore[call-arg]
