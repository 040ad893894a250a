# api/assets/views.py
"""
Repair asset endpoints.
"""
from fastapi import APIRouter, HTTPException, Query, Response, status

from config import settings
from core.deps import AssetTable, CurrentOperator
from .models import (
    AssetCreate,
    AssetUpdate,
    AssetRead,
    AssetPage,
    AssetExistsResponse,
)
from . import db_manager

router = APIRouter(prefix="/assets", tags=["assets"])


def _not_found(exc: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=str(exc),
    )


@router.get(
    "",
    response_model=AssetPage,
    summary="List assets one page at a time",
)
async def list_assets_endpoint(
    current_operator: CurrentOperator,
    gw: AssetTable,
    page: int = Query(0, ge=0, description="Zero-based page index"),
    page_size: int | None = Query(None, ge=1, le=100),
) -> AssetPage:
    """
    Return the assets at offset page * page_size, ordered by tracking date,
    together with the total count so the client knows whether to keep
    scrolling.
    """
    size = page_size or settings.PAGE_SIZE
    offset = page * size
    rows, total = await db_manager.list_page(gw, offset, size)

    return AssetPage(
        items=[AssetRead.model_validate(r) for r in rows],
        page=page,
        page_size=size,
        total_count=total,
        has_more=offset + len(rows) < total,
    )


@router.get(
    "/exists",
    response_model=AssetExistsResponse,
    summary="Check whether an asset number is already in use",
)
async def asset_exists_endpoint(
    current_operator: CurrentOperator,
    gw: AssetTable,
    asset_number: str = Query(..., min_length=1),
) -> AssetExistsResponse:
    """Advisory only: a concurrent insert can still create a duplicate."""
    exists = await db_manager.asset_number_exists(gw, asset_number)
    return AssetExistsResponse(asset_number=asset_number, exists=exists)


@router.get(
    "/{asset_id}",
    response_model=AssetRead,
    summary="Get asset by ID",
)
async def get_asset_endpoint(
    asset_id: int,
    current_operator: CurrentOperator,
    gw: AssetTable,
) -> AssetRead:
    try:
        asset = await db_manager.get_asset(gw, asset_id)
    except db_manager.AssetNotFoundError as exc:
        raise _not_found(exc) from exc

    return AssetRead.model_validate(asset)


@router.post(
    "",
    response_model=AssetRead,
    status_code=status.HTTP_201_CREATED,
    summary="Log an asset for repair",
)
async def create_asset_endpoint(
    payload: AssetCreate,
    current_operator: CurrentOperator,
    gw: AssetTable,
    check_duplicate: bool = Query(True, description="Reject numbers already in use (best-effort)"),
) -> AssetRead:
    """
    Create a pending asset. The duplicate check is a separate read before the
    insert, so it can miss a concurrent create.
    """
    try:
        asset = await db_manager.create_asset(
            gw,
            asset_number=payload.asset_number,
            name=payload.name,
            tracking_date=payload.tracking_date,
            check_duplicate=check_duplicate,
        )
    except db_manager.DuplicateAssetNumberError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc

    return AssetRead.model_validate(asset)


@router.put(
    "/{asset_id}",
    response_model=AssetRead,
    summary="Edit an asset",
)
async def update_asset_endpoint(
    asset_id: int,
    payload: AssetUpdate,
    current_operator: CurrentOperator,
    gw: AssetTable,
) -> AssetRead:
    try:
        asset = await db_manager.update_asset(gw, asset_id, payload.model_dump(exclude_unset=True))
    except db_manager.AssetNotFoundError as exc:
        raise _not_found(exc) from exc

    return AssetRead.model_validate(asset)


@router.post(
    "/{asset_id}/complete",
    response_model=AssetRead,
    summary="Mark an asset repaired",
)
async def complete_asset_endpoint(
    asset_id: int,
    current_operator: CurrentOperator,
    gw: AssetTable,
) -> AssetRead:
    """Records the session operator as completed_by along with the time."""
    try:
        asset = await db_manager.complete_asset(gw, asset_id, current_operator)
    except db_manager.AssetNotFoundError as exc:
        raise _not_found(exc) from exc

    return AssetRead.model_validate(asset)


@router.post(
    "/{asset_id}/revert",
    response_model=AssetRead,
    summary="Send an asset back to pending",
)
async def revert_asset_endpoint(
    asset_id: int,
    current_operator: CurrentOperator,
    gw: AssetTable,
) -> AssetRead:
    try:
        asset = await db_manager.revert_asset(gw, asset_id)
    except db_manager.AssetNotFoundError as exc:
        raise _not_found(exc) from exc

    return AssetRead.model_validate(asset)


@router.delete(
    "/{asset_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an asset",
)
async def delete_asset_endpoint(
    asset_id: int,
    current_operator: CurrentOperator,
    gw: AssetTable,
) -> Response:
    try:
        await db_manager.delete_asset(gw, asset_id)
    except db_manager.AssetNotFoundError as exc:
        raise _not_found(exc) from exc

    return Response(status_code=status.HTTP_204_NO_CONTENT)
