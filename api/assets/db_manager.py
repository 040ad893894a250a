# api/assets/db_manager.py
"""
Business logic for tracked repair assets.

Every function takes a TableGateway bound to the assets table; each mutation is
a single gateway call.
"""
import logging
from datetime import date, datetime, timezone

from core.gateway import TableGateway
from db_models.asset import Asset, AssetStatus
from . import queries

logger = logging.getLogger("repair_tracker.assets")


class AssetNotFoundError(Exception):
    """Raised when an asset doesn't exist."""
    pass


class DuplicateAssetNumberError(Exception):
    """
    Raised when the pre-insert check finds the asset number already in use.

    The check reads before it writes, so two concurrent creates can still both
    pass it. Treat it as advisory.
    """
    pass


async def list_page(gw: TableGateway, offset: int, limit: int) -> tuple[list[Asset], int]:
    """Return one window of assets in follow-up order, plus the total count."""
    return await gw.select(
        ordering=queries.LIST_ORDERING,
        range_=queries.page_range(offset, limit),
    )


async def get_asset(gw: TableGateway, asset_id: int) -> Asset:
    """Get an asset by ID. Raises AssetNotFoundError if not found."""
    rows, _ = await gw.select(queries.by_id(asset_id))
    if not rows:
        raise AssetNotFoundError(f"Asset {asset_id} not found")
    return rows[0]


async def asset_number_exists(gw: TableGateway, asset_number: str) -> bool:
    """Best-effort duplicate check; see DuplicateAssetNumberError."""
    _, total = await gw.select(queries.by_asset_number(asset_number), range_=queries.page_range(0, 1))
    return total > 0


async def create_asset(
    gw: TableGateway,
    asset_number: str,
    name: str,
    tracking_date: date,
    *,
    check_duplicate: bool = True,
) -> Asset:
    """
    Insert a new pending asset.

    Raises:
        DuplicateAssetNumberError: If check_duplicate is set and the number is
            already used by another asset
    """
    if check_duplicate and await asset_number_exists(gw, asset_number):
        raise DuplicateAssetNumberError(f"Asset number '{asset_number}' already exists")

    return await gw.insert({
        "asset_number": asset_number,
        "name": name,
        "tracking_date": tracking_date,
        "status": AssetStatus.PENDING.value,
    })


async def update_asset(gw: TableGateway, asset_id: int, changes: dict) -> Asset:
    """
    Edit the descriptive fields of an asset.

    Only asset_number, name and tracking_date may change here; status moves
    through complete_asset/revert_asset.
    """
    allowed = {"asset_number", "name", "tracking_date"}
    patch = {k: v for k, v in changes.items() if k in allowed and v is not None}
    if not patch:
        return await get_asset(gw, asset_id)

    rows = await gw.update(queries.by_id(asset_id), patch)
    if not rows:
        raise AssetNotFoundError(f"Asset {asset_id} not found")
    return rows[0]


async def complete_asset(
    gw: TableGateway,
    asset_id: int,
    operator: str,
    completed_at: datetime | None = None,
) -> Asset:
    """Mark an asset repaired by `operator`."""
    if completed_at is None:
        completed_at = datetime.now(timezone.utc)

    rows = await gw.update(queries.by_id(asset_id), queries.complete_patch(operator, completed_at))
    if not rows:
        raise AssetNotFoundError(f"Asset {asset_id} not found")
    logger.info("asset %s completed by %s", asset_id, operator)
    return rows[0]


async def revert_asset(gw: TableGateway, asset_id: int) -> Asset:
    """Send a completed asset back to pending."""
    rows = await gw.update(queries.by_id(asset_id), queries.revert_patch())
    if not rows:
        raise AssetNotFoundError(f"Asset {asset_id} not found")
    logger.info("asset %s reverted to pending", asset_id)
    return rows[0]


async def delete_asset(gw: TableGateway, asset_id: int) -> None:
    deleted = await gw.delete(queries.by_id(asset_id))
    if deleted == 0:
        raise AssetNotFoundError(f"Asset {asset_id} not found")
