"""
Clear Air Habit — Centralized configuration.

Loads all settings from .env and validates them.
This module is the foundation for every other module in the project.
"""

from __future__ import annotations

import os
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

# Load .env from project root (one level up from clearair/config.py)
_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_ENV_PATH)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # SQLite document store
    DATABASE_PATH: str = "data/clearair.db"

    # Reference timezone for day boundaries ("what day is it")
    TIMEZONE: str = "UTC"

    # First column of the month grid, ISO numbering: 1 = Monday ... 7 = Sunday
    WEEK_START: int = 1

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("TIMEZONE")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown TIMEZONE: {v!r}") from exc
        return v

    @field_validator("WEEK_START", mode="before")
    @classmethod
    def parse_week_start(cls, v: str | int) -> int:
        week_start = int(v)
        if not 1 <= week_start <= 7:
            raise ValueError(f"WEEK_START must be between 1 and 7, got {week_start}")
        return week_start

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got '{v}'")
        return level

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.TIMEZONE)


def _load_settings() -> Settings:
    """Load settings from environment."""
    return Settings(
        DATABASE_PATH=os.getenv("DATABASE_PATH", "data/clearair.db"),
        TIMEZONE=os.getenv("TIMEZONE", "UTC"),
        WEEK_START=os.getenv("WEEK_START", "1"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
    )


# Imported by other modules as:
#   from clearair.config import settings
settings = _load_settings()
