# api/preferences/views.py
"""
Theme preference endpoints.
"""
from fastapi import APIRouter

from core.deps import CurrentOperator, PreferenceTable
from .models import ThemePreferenceBody, ThemePreferenceResponse
from . import db_manager

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("/theme", response_model=ThemePreferenceResponse, summary="Get theme preference")
async def get_theme_endpoint(
    current_operator: CurrentOperator,
    gw: PreferenceTable,
) -> ThemePreferenceResponse:
    dark_mode = await db_manager.get_dark_mode(gw, current_operator)
    return ThemePreferenceResponse(username=current_operator, dark_mode=dark_mode)


@router.put("/theme", response_model=ThemePreferenceResponse, summary="Set theme preference")
async def set_theme_endpoint(
    payload: ThemePreferenceBody,
    current_operator: CurrentOperator,
    gw: PreferenceTable,
) -> ThemePreferenceResponse:
    dark_mode = await db_manager.set_dark_mode(gw, current_operator, payload.dark_mode)
    return ThemePreferenceResponse(username=current_operator, dark_mode=dark_mode)
