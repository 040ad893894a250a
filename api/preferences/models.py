# api/preferences/models.py
from pydantic import BaseModel


class ThemePreferenceBody(BaseModel):
    dark_mode: bool


class ThemePreferenceResponse(BaseModel):
    username: str
    dark_mode: bool
