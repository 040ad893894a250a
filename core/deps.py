# core/deps.py
"""
FastAPI dependencies: operator session and table gateways.
"""
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from db_models.asset import Asset
from db_models.preference import UserPreference
from core.gateway import TableGateway
from core.security import username_from_token

# Bearer token extraction from the Authorization header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/session/login", auto_error=False)


class AuthenticationError(HTTPException):
    """Raised when no valid operator session is present."""
    def __init__(self, detail: str = "Could not validate session"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_operator(
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> str:
    """
    Return the operator name of the active session.

    Raises:
        AuthenticationError: If the token is missing, invalid or expired
    """
    if token is None:
        raise AuthenticationError("Not authenticated")

    username = username_from_token(token)
    if username is None:
        raise AuthenticationError("Invalid or expired token")
    return username


async def get_asset_gateway(
    db: AsyncSession = Depends(get_session),
) -> TableGateway:
    return TableGateway(db, Asset)


async def get_preference_gateway(
    db: AsyncSession = Depends(get_session),
) -> TableGateway:
    return TableGateway(db, UserPreference)


# Type aliases for cleaner endpoint signatures
CurrentOperator = Annotated[str, Depends(get_current_operator)]
AssetTable = Annotated[TableGateway, Depends(get_asset_gateway)]
PreferenceTable = Annotated[TableGateway, Depends(get_preference_gateway)]
