# api/session/models.py
"""
Pydantic models for operator sessions.
"""
from typing import Annotated

from pydantic import BaseModel, StringConstraints


class LoginRequest(BaseModel):
    """Operator name; the tracker has no passwords."""
    username: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


class Token(BaseModel):
    """JWT token response."""
    access_token: str
    token_type: str = "bearer"
    username: str


class OperatorResponse(BaseModel):
    username: str
