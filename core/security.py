# core/security.py
"""
Session token handling.

The tracker identifies operators by name only; a login issues a signed JWT
whose subject is that name. There are no passwords.
"""
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from config import settings

# JWT configuration
ALGORITHM = "HS256"


def get_secret_key() -> str:
    """Get JWT secret key from settings or fall back to a development key."""
    secret = getattr(settings, 'SECRET_KEY', None)
    if secret:
        return secret
    # Development fallback - NOT for production!
    return "dev-secret-key-change-in-production-abc123xyz"


def create_access_token(
    username: str,
    expires_delta: timedelta | None = None
) -> str:
    """
    Create a session token for an operator.

    Args:
        username: Operator name stored as the token subject
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta

    to_encode = {"sub": username, "exp": expire, "type": "access"}
    return jwt.encode(to_encode, get_secret_key(), algorithm=ALGORITHM)


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and validate a JWT token. Returns None if invalid or expired."""
    try:
        return jwt.decode(token, get_secret_key(), algorithms=[ALGORITHM])
    except JWTError:
        return None


def username_from_token(token: str) -> str | None:
    """Return the operator name carried by a valid access token."""
    payload = decode_token(token)
    if payload is None or payload.get("type") != "access":
        return None
    username = payload.get("sub")
    if not isinstance(username, str) or not username.strip():
        return None
    return username
