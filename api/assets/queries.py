# api/assets/queries.py
"""
Filter and ordering builders for asset gateway calls.
"""
from datetime import datetime

from core.gateway import Filter, Order, Range, eq, gte, lt
from db_models.asset import AssetStatus


# The list is paged in follow-up order, earliest first
LIST_ORDERING = (Order("tracking_date", ascending=True), Order("id", ascending=True))


def by_id(asset_id: int) -> list[Filter]:
    """Match a single asset by its ID."""
    return [eq("id", asset_id)]


def by_asset_number(asset_number: str) -> list[Filter]:
    """Match assets carrying exactly this asset number."""
    return [eq("asset_number", asset_number)]


def page_range(offset: int, limit: int) -> Range:
    return Range(offset=offset, limit=limit)


def created_between(start: datetime, end: datetime) -> list[Filter]:
    """Assets created within [start, end)."""
    return [gte("created_at", start), lt("created_at", end)]


def completed_between(start: datetime, end: datetime) -> list[Filter]:
    """Completed assets whose completion_date falls within [start, end)."""
    return [
        eq("status", AssetStatus.COMPLETED.value),
        gte("completion_date", start),
        lt("completion_date", end),
    ]


def complete_patch(operator: str, completed_at: datetime) -> dict:
    """Patch moving an asset to completed; all three fields change together."""
    return {
        "status": AssetStatus.COMPLETED.value,
        "completion_date": completed_at,
        "completed_by": operator,
    }


def revert_patch() -> dict:
    """Patch moving an asset back to pending and clearing completion fields."""
    return {
        "status": AssetStatus.PENDING.value,
        "completion_date": None,
        "completed_by": None,
    }
