# api/assets/models.py
"""
Pydantic models for asset requests and responses.
"""
from datetime import date, datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

# Required text field: surrounding whitespace stripped, must not end up empty
RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class AssetCreate(BaseModel):
    """Fields required to log a new asset for repair."""
    asset_number: Annotated[RequiredText, Field(max_length=100)]
    name: Annotated[RequiredText, Field(max_length=255)]
    tracking_date: date


class AssetUpdate(BaseModel):
    """Edit of an existing asset; omitted fields keep their value."""
    asset_number: Annotated[RequiredText, Field(max_length=100)] | None = None
    name: Annotated[RequiredText, Field(max_length=255)] | None = None
    tracking_date: date | None = None


class AssetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    asset_number: str
    name: str
    tracking_date: date
    status: str
    completion_date: datetime | None = None
    completed_by: str | None = None
    created_at: datetime | None = None


class AssetPage(BaseModel):
    """One page of the asset list."""
    items: list[AssetRead]
    page: int
    page_size: int
    total_count: int
    has_more: bool


class AssetExistsResponse(BaseModel):
    asset_number: str
    exists: bool
