# api/statistics/views.py
"""
Aggregate statistics endpoints.
"""
from datetime import date, datetime, timezone

from fastapi import APIRouter, Query

from config import settings
from core.deps import AssetTable, CurrentOperator
from .aggregator import TimeRange
from .models import StatisticsOverview, CompletionSeries
from . import db_manager

router = APIRouter(prefix="/statistics", tags=["statistics"])


def _utc_today() -> date:
    """Today in UTC, the calendar the completion buckets are computed in."""
    return datetime.now(timezone.utc).date()


@router.get(
    "/overview",
    response_model=StatisticsOverview,
    summary="Get repair statistics overview",
)
async def get_overview_endpoint(
    current_operator: CurrentOperator,
    gw: AssetTable,
    year: int | None = Query(None, ge=1970, le=9999, description="Calendar year for the monthly series"),
) -> StatisticsOverview:
    """
    Total, pending and completed counts, the top 10 item names, and the
    zero-filled monthly series with its running-average trend.
    """
    target_year = year or settings.STATS_YEAR or _utc_today().year
    data = await db_manager.get_overview(gw, target_year)
    return StatisticsOverview(**data)


@router.get(
    "/completions",
    response_model=CompletionSeries,
    summary="Get completed repairs per period",
)
async def get_completions_endpoint(
    current_operator: CurrentOperator,
    gw: AssetTable,
    time_range: TimeRange = Query(TimeRange.YEAR, alias="range"),
    periods: int = Query(1, ge=1, le=60, description="Number of trailing periods"),
) -> CompletionSeries:
    data = await db_manager.get_completion_series(gw, time_range, _utc_today(), periods)
    return CompletionSeries(**data)
