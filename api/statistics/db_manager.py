# api/statistics/db_manager.py
"""
Fetches for dashboard statistics. Aggregation happens in aggregator.py.
"""
from datetime import date, datetime, time, timezone

from core.gateway import Order, TableGateway
from api.assets import queries as asset_queries
from . import aggregator
from .aggregator import TimeRange


def _start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


async def get_overview(gw: TableGateway, year: int) -> dict:
    """
    Snapshot of every asset reduced to status counts and top item names, plus
    the per-month creation series for `year`.
    """
    rows, _ = await gw.select()
    counts = aggregator.count_statuses(r.status for r in rows)

    start = _start_of_day(date(year, 1, 1))
    end = _start_of_day(date(year + 1, 1, 1))
    created, _ = await gw.select(
        asset_queries.created_between(start, end),
        ordering=[Order("created_at")],
    )

    return {
        "total": counts.total,
        "pending": counts.pending,
        "completed": counts.completed,
        "status_distribution": aggregator.status_distribution(counts),
        "top_items": aggregator.rank_names(r.name for r in rows),
        "year": year,
        "monthly": aggregator.monthly_series((r.created_at for r in created), year),
    }


async def get_completion_series(
    gw: TableGateway,
    time_range: TimeRange,
    today: date,
    periods: int = 1,
) -> dict:
    """Completed-asset counts for the trailing `periods` periods of `time_range`."""
    bounds = aggregator.period_window(today, time_range, periods)
    rows, _ = await gw.select(
        asset_queries.completed_between(_start_of_day(bounds[0]), _start_of_day(bounds[-1])),
    )

    return {
        "range": time_range.value,
        "start": bounds[0],
        "end": bounds[-1],
        "series": aggregator.completion_series(
            (r.completion_date for r in rows), bounds, time_range
        ),
    }
