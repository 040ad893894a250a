# api/statistics/models.py
"""
Pydantic models for statistics responses.
"""
from datetime import date
from pydantic import BaseModel


class StatusCount(BaseModel):
    status: str
    count: int


class TopItem(BaseModel):
    """An item name ranked by how often it was reported."""
    name: str
    count: int
    rank: int


class MonthlyStat(BaseModel):
    month: str
    count: int
    trend: float


class StatisticsOverview(BaseModel):
    """Totals, distribution, ranking and monthly series in one response."""
    total: int
    pending: int
    completed: int
    status_distribution: list[StatusCount]
    top_items: list[TopItem]
    year: int
    monthly: list[MonthlyStat]


class PeriodStat(BaseModel):
    period: str
    count: int


class CompletionSeries(BaseModel):
    """Completed repairs per period; `end` is exclusive."""
    range: str
    start: date
    end: date
    series: list[PeriodStat]
