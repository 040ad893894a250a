"""
Settings selection.

`MODE` (or `APP_ENV`) picks one settings class per environment; the chosen
class reads its env/.env.<name> file when present and the process environment.
"""
from __future__ import annotations

import os

from .base import CommonSettings
from .local import LocalSettings
from .stage import StageSettings
from .prod import ProdSettings
from .test import TestSettings

MODE = (os.environ.get("MODE") or os.environ.get("APP_ENV") or "local").lower()

_MAPPING: dict[str, type[CommonSettings]] = {
    "local": LocalSettings,
    "stage": StageSettings,
    "staging": StageSettings,
    "prod": ProdSettings,
    "production": ProdSettings,
    "test": TestSettings,
}


def _choose_settings_class(mode: str) -> type[CommonSettings]:
    return _MAPPING.get(mode, LocalSettings)


SettingsClass = _choose_settings_class(MODE)
settings = SettingsClass()

__all__ = ["settings", "SettingsClass", "MODE"]
