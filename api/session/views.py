# api/session/views.py
"""
Operator login endpoints.
"""
import logging

from fastapi import APIRouter

from core.deps import CurrentOperator
from core.security import create_access_token
from .models import LoginRequest, Token, OperatorResponse

logger = logging.getLogger("repair_tracker.session")

router = APIRouter(prefix="/session", tags=["session"])


@router.post("/login", response_model=Token, summary="Start an operator session")
async def login(credentials: LoginRequest) -> Token:
    """
    Issue a session token for the given operator name. The name is recorded
    as completed_by on every repair the operator completes.
    """
    logger.info("operator %s logged in", credentials.username)
    return Token(
        access_token=create_access_token(credentials.username),
        username=credentials.username,
    )


@router.get("/me", response_model=OperatorResponse, summary="Get the session operator")
async def get_me(current_operator: CurrentOperator) -> OperatorResponse:
    return OperatorResponse(username=current_operator)
