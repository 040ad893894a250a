# api/statistics/aggregator.py
"""
Pure reducers turning asset snapshots into dashboard statistics.

Nothing here touches the data store; db_manager fetches the rows and hands
them over.
"""
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum

from dateutil.relativedelta import relativedelta

from db_models.asset import AssetStatus

TOP_ITEMS_LIMIT = 10


@dataclass(frozen=True)
class StatusCounts:
    total: int
    pending: int
    completed: int


def count_statuses(statuses: Iterable[str]) -> StatusCounts:
    total = pending = completed = 0
    for status in statuses:
        total += 1
        if status == AssetStatus.PENDING.value:
            pending += 1
        elif status == AssetStatus.COMPLETED.value:
            completed += 1
    return StatusCounts(total=total, pending=pending, completed=completed)


def status_distribution(counts: StatusCounts) -> list[dict]:
    return [
        {"status": AssetStatus.PENDING.value, "count": counts.pending},
        {"status": AssetStatus.COMPLETED.value, "count": counts.completed},
    ]


def rank_names(names: Iterable[str], limit: int = TOP_ITEMS_LIMIT) -> list[dict]:
    """
    Most frequently reported item names, highest count first.

    Counter keeps first-encounter order and sorted() is stable, so equal
    counts stay in the order the names first appeared.
    """
    counts = Counter(names)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]
    return [
        {"name": name, "count": count, "rank": index + 1}
        for index, (name, count) in enumerate(ranked)
    ]


def monthly_series(timestamps: Iterable[datetime], year: int) -> list[dict]:
    """
    Count records per calendar month of `year`.

    Always returns 12 entries, zero-filled. `trend` is the running average:
    cumulative count up to and including the month divided by its 1-based
    position.
    """
    buckets = [0] * 12
    for ts in timestamps:
        ts = _as_utc_date(ts)
        if ts.year == year:
            buckets[ts.month - 1] += 1

    series = []
    running_total = 0
    for index, count in enumerate(buckets):
        running_total += count
        series.append({
            "month": f"{year:04d}-{index + 1:02d}",
            "count": count,
            "trend": running_total / (index + 1),
        })
    return series


class TimeRange(str, Enum):
    """Period size for the completion series."""
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


_STEP = {
    TimeRange.WEEK: relativedelta(weeks=1),
    TimeRange.MONTH: relativedelta(months=1),
    TimeRange.QUARTER: relativedelta(months=3),
    TimeRange.YEAR: relativedelta(years=1),
}


def period_start(day: date, time_range: TimeRange) -> date:
    """First day of the period containing `day` (weeks start on Monday)."""
    if time_range is TimeRange.WEEK:
        return day - relativedelta(days=day.weekday())
    if time_range is TimeRange.MONTH:
        return day.replace(day=1)
    if time_range is TimeRange.QUARTER:
        return date(day.year, (day.month - 1) // 3 * 3 + 1, 1)
    return date(day.year, 1, 1)


def period_label(start: date, time_range: TimeRange) -> str:
    if time_range is TimeRange.WEEK:
        return start.strftime("%m/%d")
    if time_range is TimeRange.MONTH:
        return start.strftime("%Y-%m")
    if time_range is TimeRange.QUARTER:
        return f"{start.year}-Q{(start.month - 1) // 3 + 1}"
    return str(start.year)


def period_window(today: date, time_range: TimeRange, periods: int = 1) -> list[date]:
    """
    Start dates of the trailing `periods` periods ending with the one that
    contains `today`, plus the start of the following period as a closing
    bound. The result therefore has periods + 1 entries.
    """
    if periods < 1:
        raise ValueError("periods must be at least 1")
    step = _STEP[time_range]
    current = period_start(today, time_range)
    first = current - step * (periods - 1)
    return [first + step * i for i in range(periods + 1)]


def completion_series(
    completion_dates: Iterable[datetime],
    bounds: list[date],
    time_range: TimeRange,
) -> list[dict]:
    """Count completions per half-open period [bounds[i], bounds[i + 1])."""
    counts = [0] * (len(bounds) - 1)
    for value in completion_dates:
        if value is None:
            continue
        day = _as_utc_date(value)
        for index in range(len(counts)):
            if bounds[index] <= day < bounds[index + 1]:
                counts[index] += 1
                break

    return [
        {"period": period_label(bounds[index], time_range), "count": count}
        for index, count in enumerate(counts)
    ]


def _as_utc_date(value: datetime | date) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value
