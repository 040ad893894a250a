from __future__ import annotations

from pydantic_settings import SettingsConfigDict

from config.base import CommonSettings


class TestSettings(CommonSettings):
    # Each test points the session dependency at its own SQLite file; this URL
    # only backs the module-level engine, which tests never connect.
    DATABASE_URL: str | None = "sqlite+aiosqlite:///./repair_tracker_test.db"
    APP_ENV: str = "test"
    SECRET_KEY: str | None = "test-secret-key"
    STATS_YEAR: int | None = 2025

    # Never read an env file, whatever lies in env/
    model_config = SettingsConfigDict(env_file=None)
