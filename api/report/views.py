# api/report/views.py
"""
Public quick-report endpoint.

Anyone holding the report link can log an item needing repair; no operator
session is required. Reports land in the same assets table as items created
from the dashboard and carry no distinguishing field.
"""
from fastapi import APIRouter, status

from core.deps import AssetTable
from api.assets.models import AssetCreate, AssetRead
from api.assets import db_manager

router = APIRouter(prefix="/report", tags=["report"])


@router.post(
    "",
    response_model=AssetRead,
    status_code=status.HTTP_201_CREATED,
    summary="Report an item needing repair",
)
async def quick_report_endpoint(
    payload: AssetCreate,
    gw: AssetTable,
) -> AssetRead:
    asset = await db_manager.create_asset(
        gw,
        asset_number=payload.asset_number,
        name=payload.name,
        tracking_date=payload.tracking_date,
        check_duplicate=False,
    )
    return AssetRead.model_validate(asset)
