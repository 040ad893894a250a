from __future__ import annotations

from pydantic import model_validator
from pydantic_settings import SettingsConfigDict

from config.base import CommonSettings, env_file
from config.database import get_database_url


class StageSettings(CommonSettings):
    """
    Staging receives the database as separate DB_* variables from the
    platform; DATABASE_URL is assembled from them unless given outright.
    """

    APP_ENV: str = "stage"
    DEBUG: bool = False

    DB_DRIVER: str = "postgresql+asyncpg"
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "tracker"
    DB_PASSWORD: str = ""
    DB_NAME: str = "repairs"

    model_config = SettingsConfigDict(env_file=env_file("staging"))

    @model_validator(mode="after")
    def _assemble_database_url(self) -> "StageSettings":
        if not self.DATABASE_URL:
            self.DATABASE_URL = get_database_url(
                driver=self.DB_DRIVER,
                host=self.DB_HOST,
                port=self.DB_PORT,
                user=self.DB_USER,
                password=self.DB_PASSWORD,
                name=self.DB_NAME,
            )
        return self
