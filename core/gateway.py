# core/gateway.py
"""
Table-oriented data gateway.

Every state change in the tracker is a direct select/insert/update/delete
against one table. TableGateway wraps an AsyncSession and one mapped model and
exposes exactly those four operations with filter, ordering and range
parameters, so callers never build SQLAlchemy statements themselves.
"""
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from db_base import Base

logger = logging.getLogger("repair_tracker.gateway")

_OPERATORS = ("eq", "neq", "gt", "gte", "lt", "lte", "ilike")


@dataclass(frozen=True)
class Filter:
    """A single column predicate. Filters passed together are AND-ed."""
    column: str
    op: str
    value: Any

    def __post_init__(self):
        if self.op not in _OPERATORS:
            raise ValueError(f"Unsupported filter operator: {self.op}")


@dataclass(frozen=True)
class Order:
    column: str
    ascending: bool = True


@dataclass(frozen=True)
class Range:
    """Row window: skip `offset` rows, return at most `limit`."""
    offset: int
    limit: int

    def __post_init__(self):
        if self.offset < 0 or self.limit < 0:
            raise ValueError("Range offset and limit must be non-negative")


def eq(column: str, value: Any) -> Filter:
    return Filter(column, "eq", value)


def gte(column: str, value: Any) -> Filter:
    return Filter(column, "gte", value)


def lt(column: str, value: Any) -> Filter:
    return Filter(column, "lt", value)


def _escape_like(value: str) -> str:
    """Make LIKE wildcards in `value` match literally (escape character: backslash)."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class GatewayError(Exception):
    """Raised when the data store rejects or fails an operation."""

    def __init__(self, operation: str, table: str, detail: str = ""):
        self.operation = operation
        self.table = table
        self.detail = detail
        message = f"{operation} on '{table}' failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class TableGateway:
    """select/insert/update/delete over a single mapped table."""

    def __init__(self, session: AsyncSession, model: type[Base]):
        self.session = session
        self.model = model
        self.table = model.__tablename__

    def _column(self, name: str):
        column = self.model.__table__.columns.get(name)
        if column is None:
            raise ValueError(f"Unknown column '{name}' for table '{self.table}'")
        return getattr(self.model, name)

    def _where(self, stmt: Select, filters: Sequence[Filter]) -> Select:
        for f in filters:
            column = self._column(f.column)
            if f.op == "eq":
                clause = column.is_(None) if f.value is None else column == f.value
            elif f.op == "neq":
                clause = column.is_not(None) if f.value is None else column != f.value
            elif f.op == "gt":
                clause = column > f.value
            elif f.op == "gte":
                clause = column >= f.value
            elif f.op == "lt":
                clause = column < f.value
            elif f.op == "lte":
                clause = column <= f.value
            else:
                needle = _escape_like(str(f.value).lower())
                clause = func.lower(column).like(f"%{needle}%", escape="\\")
            stmt = stmt.where(clause)
        return stmt

    async def _fail(self, operation: str, exc: SQLAlchemyError):
        logger.error("%s on %s failed: %s", operation, self.table, exc)
        await self.session.rollback()
        raise GatewayError(operation, self.table, str(exc.__class__.__name__)) from exc

    async def select(
        self,
        filters: Sequence[Filter] = (),
        ordering: Sequence[Order] = (),
        range_: Range | None = None,
    ) -> tuple[list[Any], int]:
        """
        Return the matching rows and the exact number of rows matching
        `filters`. The count ignores `range_`, so one call yields both a page
        and the total needed to decide whether more pages exist.
        """
        stmt = self._where(select(self.model), filters)
        count_stmt = self._where(select(func.count()).select_from(self.model), filters)
        for order in ordering:
            column = self._column(order.column)
            stmt = stmt.order_by(column.asc() if order.ascending else column.desc())
        if range_ is not None:
            stmt = stmt.offset(range_.offset).limit(range_.limit)

        try:
            result = await self.session.execute(stmt)
            rows = list(result.scalars().all())
            result = await self.session.execute(count_stmt)
            total = result.scalar() or 0
        except SQLAlchemyError as exc:
            await self._fail("select", exc)

        logger.debug("select %s filters=%s range=%s -> %d/%d", self.table, filters, range_, len(rows), total)
        return rows, total

    async def insert(self, values: dict[str, Any]) -> Any:
        for key in values:
            self._column(key)
        row = self.model(**values)
        try:
            self.session.add(row)
            await self.session.commit()
            await self.session.refresh(row)
        except SQLAlchemyError as exc:
            await self._fail("insert", exc)
        logger.info("insert %s -> %r", self.table, row)
        return row

    async def update(self, filters: Sequence[Filter], patch: dict[str, Any]) -> list[Any]:
        """Apply `patch` to every matching row in a single commit."""
        for key in patch:
            self._column(key)
        stmt = self._where(select(self.model), filters)
        try:
            result = await self.session.execute(stmt)
            rows = list(result.scalars().all())
            for row in rows:
                for key, value in patch.items():
                    setattr(row, key, value)
            await self.session.commit()
            for row in rows:
                await self.session.refresh(row)
        except SQLAlchemyError as exc:
            await self._fail("update", exc)
        logger.info("update %s filters=%s -> %d row(s)", self.table, filters, len(rows))
        return rows

    async def delete(self, filters: Sequence[Filter]) -> int:
        stmt = self._where(select(self.model), filters)
        try:
            result = await self.session.execute(stmt)
            rows = list(result.scalars().all())
            for row in rows:
                await self.session.delete(row)
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self._fail("delete", exc)
        logger.info("delete %s filters=%s -> %d row(s)", self.table, filters, len(rows))
        return len(rows)
