# dashboard/list_view.py
"""
Asset list view model: filtering, sorting and row actions over the loaded
pages.
"""
import locale
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from functools import cmp_to_key
from typing import Any

from api.assets import db_manager
from core.gateway import GatewayError
from db_models.asset import AssetStatus
from .context import AppContext
from .pagination import PaginationController

logger = logging.getLogger("repair_tracker.dashboard.list")

SORTABLE_COLUMNS = ("asset_number", "name", "tracking_date", "status")


@dataclass
class ListFilters:
    show_all_status: bool = False
    tomorrow_only: bool = False
    query: str = ""


@dataclass
class SortState:
    key: str | None = None
    ascending: bool = True

    def toggle(self, key: str) -> "SortState":
        """Same column flips the direction; a new column starts ascending."""
        if key not in SORTABLE_COLUMNS:
            raise ValueError(f"Cannot sort by '{key}'")
        if self.key == key and self.ascending:
            self.ascending = False
        else:
            self.key = key
            self.ascending = True
        return self

    @property
    def direction(self) -> str:
        return "asc" if self.ascending else "desc"


def filter_assets(items: Iterable[Any], filters: ListFilters, today: date) -> list[Any]:
    """AND of the status, tomorrow-only and text-query predicates."""
    tomorrow = today + timedelta(days=1)
    query = filters.query.lower()

    result = []
    for asset in items:
        if not filters.show_all_status and asset.status == AssetStatus.COMPLETED.value:
            continue
        if filters.tomorrow_only and asset.tracking_date != tomorrow:
            continue
        if query and query not in asset.asset_number.lower() and query not in asset.name.lower():
            continue
        result.append(asset)
    return result


def collation_key(text: str) -> tuple[str, str]:
    """
    Sort key for display strings: case-insensitive under the active collation
    locale, lowercase first when two strings differ only in case.
    """
    return locale.strxfrm(text.casefold()), text.swapcase()


def _compare(a: Any, b: Any) -> int:
    if a is None or b is None:
        return 0
    if isinstance(a, str) and isinstance(b, str):
        a, b = collation_key(a), collation_key(b)
    return (a > b) - (a < b)


def sort_assets(items: Sequence[Any], sort: SortState) -> list[Any]:
    if sort.key is None:
        return list(items)

    key = sort.key
    sign = 1 if sort.ascending else -1

    def compare(x, y):
        return sign * _compare(getattr(x, key), getattr(y, key))

    return sorted(items, key=cmp_to_key(compare))


class ListViewModel:
    """
    Holds the accumulated asset list and derives what the table shows.

    Consistency strategy: after any mutation the whole list is invalidated and
    reloaded from the first page rather than patched in place.
    """

    def __init__(self, context: AppContext):
        self.context = context
        self.filters = ListFilters()
        self.sort = SortState()
        self.pagination = PaginationController(self._fetch_page, context.page_size)

    async def _fetch_page(self, offset: int, limit: int):
        return await db_manager.list_page(self.context.assets, offset, limit)

    @property
    def items(self) -> list[Any]:
        return self.pagination.items

    async def mount(self) -> bool:
        return await self.pagination.load_next_page(reset=True)

    async def on_sentinel_visible(self) -> bool:
        return await self.pagination.on_sentinel_visible()

    async def invalidate_and_resync(self) -> bool:
        """Drop every loaded page and fetch from offset 0."""
        return await self.pagination.load_next_page(reset=True)

    def toggle_sort(self, key: str) -> SortState:
        return self.sort.toggle(key)

    def rows(self) -> list[Any]:
        filtered = filter_assets(self.items, self.filters, self.context.today())
        return sort_assets(filtered, self.sort)

    def suggestions(self) -> tuple[list[str], list[str]]:
        """Distinct asset numbers and names among the loaded rows, first seen first."""
        numbers = list(dict.fromkeys(a.asset_number for a in self.items))
        names = list(dict.fromkeys(a.name for a in self.items))
        return numbers, names

    async def _mutate(self, label: str, action) -> bool:
        try:
            await action()
        except (GatewayError, db_manager.AssetNotFoundError) as exc:
            logger.error("Error in %s: %s", label, exc)
            self.context.alert(f"Failed to {label}: {exc}")
            return False
        await self.invalidate_and_resync()
        return True

    async def complete(self, asset_id: int) -> bool:
        operator = self.context.session.require()
        return await self._mutate(
            "complete asset",
            lambda: db_manager.complete_asset(self.context.assets, asset_id, operator, self.context.now()),
        )

    async def revert(self, asset_id: int) -> bool:
        return await self._mutate(
            "revert asset",
            lambda: db_manager.revert_asset(self.context.assets, asset_id),
        )

    async def delete(self, asset_id: int) -> bool:
        return await self._mutate(
            "delete asset",
            lambda: db_manager.delete_asset(self.context.assets, asset_id),
        )
