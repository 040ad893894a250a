# dashboard/pagination.py
"""
Incremental page loading behind the infinite-scroll asset list.
"""
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from core.gateway import GatewayError

logger = logging.getLogger("repair_tracker.dashboard.pagination")

# fetch_page(offset, limit) -> (rows, total_count)
FetchPage = Callable[[int, int], Awaitable[tuple[list[Any], int]]]


@dataclass
class PaginationState:
    page: int = 0
    page_size: int = 10
    loading: bool = False
    has_more: bool = True
    total_count: int = 0


class PaginationController:
    """
    Accumulates pages fetched from the data store.

    At most one fetch is in flight: a load requested while another is running
    returns immediately without queueing. Nothing stops a reload started
    before a mutation from finishing after a newer reset; the last completed
    fetch wins.
    """

    def __init__(self, fetch_page: FetchPage, page_size: int = 10):
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self.fetch_page = fetch_page
        self.state = PaginationState(page_size=page_size)
        self.items: list[Any] = []

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def has_more(self) -> bool:
        return self.state.has_more

    async def load_next_page(self, reset: bool = False) -> bool:
        """
        Fetch the next page, or page 0 when `reset` discards what is loaded.

        Returns True when a page was fetched and applied.
        """
        if self.state.loading:
            return False

        page = 0 if reset else self.state.page
        offset = page * self.state.page_size
        self.state.loading = True
        try:
            rows, total = await self.fetch_page(offset, self.state.page_size)
        except GatewayError as exc:
            logger.error("Error loading page %d: %s", page, exc)
            return False
        finally:
            self.state.loading = False

        if reset:
            self.items = []
        self.items.extend(rows)
        self.state.page = page + 1
        self.state.total_count = total
        self.state.has_more = len(self.items) < total
        logger.debug("loaded page %d: %d row(s), %d/%d", page, len(rows), len(self.items), total)
        return True

    async def on_sentinel_visible(self) -> bool:
        """The bottom-of-list sentinel scrolled into view."""
        if not self.state.has_more or self.state.loading:
            return False
        return await self.load_next_page()

    async def reset(self) -> bool:
        return await self.load_next_page(reset=True)
