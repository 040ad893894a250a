from __future__ import annotations

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root (one level up from this config package)
ROOT = Path(__file__).resolve().parents[1]


def env_file(name: str) -> str | None:
    """Path of env/.env.<name> when it exists, so a missing file is not an error."""
    candidate = ROOT / "env" / f".env.{name}"
    return str(candidate) if candidate.exists() else None


class CommonSettings(BaseSettings):
    """Settings shared by every environment."""

    DATABASE_URL: str | None = None
    APP_ENV: str = "local"
    SECRET_KEY: str | None = None
    DEBUG: bool = False

    # Asset list paging (the dashboard loads this many rows per scroll step)
    PAGE_SIZE: int = 10

    # Calendar year used by the monthly statistics; None means the current year
    STATS_YEAR: int | None = None

    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 12

    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None

    # JSON array or comma separated list; empty uses the built-in defaults
    CORS_ORIGINS: str = ""

    model_config = SettingsConfigDict(env_file_encoding="utf-8", extra="ignore")

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("PAGE_SIZE")
    @classmethod
    def _positive_page_size(cls, value: int) -> int:
        if value < 1:
            raise ValueError("PAGE_SIZE must be at least 1")
        return value
