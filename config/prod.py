from __future__ import annotations

from pydantic import model_validator
from pydantic_settings import SettingsConfigDict

from config.base import CommonSettings, env_file


class ProdSettings(CommonSettings):
    APP_ENV: str = "production"
    DEBUG: bool = False
    LOG_LEVEL: str = "WARNING"

    model_config = SettingsConfigDict(env_file=env_file("production"))

    @model_validator(mode="after")
    def _require_deployment_values(self) -> "ProdSettings":
        # The development signing key must never sign production sessions
        missing = [name for name in ("DATABASE_URL", "SECRET_KEY") if not getattr(self, name)]
        if missing:
            raise ValueError(f"Production settings require: {', '.join(missing)}")
        return self
