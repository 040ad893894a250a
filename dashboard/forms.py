# dashboard/forms.py
"""
Create, edit and quick-report form controllers.

Each form keeps a draft, validates it with the same pydantic models the API
uses, and submits through the asset gateway. A failed submit alerts and keeps
the dialog open with the draft untouched.
"""
import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

from dateutil.relativedelta import relativedelta
from pydantic import ValidationError

from api.assets import db_manager
from api.assets.models import AssetCreate, AssetUpdate
from core.gateway import GatewayError
from .autocomplete import Autocomplete
from .context import AppContext
from .list_view import ListViewModel

logger = logging.getLogger("repair_tracker.dashboard.forms")


class QuickDate(Enum):
    """Shortcut buttons for the tracking date, as (days, months) offsets."""
    TOMORROW = (1, 0)
    ONE_WEEK = (7, 0)
    TWO_WEEKS = (14, 0)
    ONE_MONTH = (0, 1)
    # One month, then 15 more days
    ONE_AND_A_HALF_MONTHS = (15, 1)

    @property
    def days(self) -> int:
        return self.value[0]

    @property
    def months(self) -> int:
        return self.value[1]


def quick_tracking_date(shortcut: QuickDate, today: date) -> date:
    """
    Apply a shortcut to `today`. Months are added first and clamp to the end
    of a shorter month, so Jan 31 plus one and a half months is Feb 28 (or 29)
    plus 15 days.
    """
    return today + relativedelta(months=shortcut.months) + relativedelta(days=shortcut.days)


@dataclass
class AssetDraft:
    asset_number: str = ""
    name: str = ""
    tracking_date: date | None = None


def describe_validation_error(exc: ValidationError) -> str:
    fields = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
    if not fields:
        return "Please check the form"
    return "Please fill in: " + ", ".join(fields)


class _AssetForm:
    """Shared dialog state: open/closed flag, draft, quick dates, validation."""

    def __init__(self, context: AppContext):
        self.context = context
        self.is_open = False
        self.draft = self._blank_draft()

    def _blank_draft(self) -> AssetDraft:
        return AssetDraft(tracking_date=self.context.today())

    def clear(self) -> None:
        self.draft = self._blank_draft()

    def close(self) -> None:
        self.is_open = False

    def apply_quick_date(self, shortcut: QuickDate) -> date:
        self.draft.tracking_date = quick_tracking_date(shortcut, self.context.today())
        return self.draft.tracking_date

    def _fields(self) -> dict[str, Any]:
        return {
            "asset_number": self.draft.asset_number,
            "name": self.draft.name,
            "tracking_date": self.draft.tracking_date,
        }

    def _validate(self, model):
        try:
            return model.model_validate(self._fields())
        except ValidationError as exc:
            self.context.alert(describe_validation_error(exc))
            return None


class CreateAssetForm(_AssetForm):
    """
    New-asset dialog with autocomplete on the number and name fields.

    Suggestions come from the rows the list has loaded so far, not from the
    whole table.
    """

    def __init__(self, context: AppContext, list_view: ListViewModel, check_duplicates: bool = True):
        super().__init__(context)
        self.list_view = list_view
        self.check_duplicates = check_duplicates
        self.number_field = Autocomplete(lambda: self.list_view.suggestions()[0])
        self.name_field = Autocomplete(lambda: self.list_view.suggestions()[1])

    def open(self) -> None:
        self.is_open = True
        self.number_field.on_focus()

    def clear(self) -> None:
        super().clear()
        self.number_field.reset()
        self.name_field.reset()

    def set_asset_number(self, text: str) -> None:
        self.number_field.on_input(text)
        self.draft.asset_number = text

    def set_name(self, text: str) -> None:
        self.name_field.on_input(text)
        self.draft.name = text

    def number_key(self, key: str) -> bool:
        handled = self.number_field.on_key(key)
        self.draft.asset_number = self.number_field.value
        return handled

    def name_key(self, key: str) -> bool:
        handled = self.name_field.on_key(key)
        self.draft.name = self.name_field.value
        return handled

    def pick_number(self, value: str) -> None:
        self.number_field.pick(value)
        self.draft.asset_number = value

    def pick_name(self, value: str) -> None:
        self.name_field.pick(value)
        self.draft.name = value

    async def submit(self) -> bool:
        payload = self._validate(AssetCreate)
        if payload is None:
            return False

        try:
            await db_manager.create_asset(
                self.context.assets,
                asset_number=payload.asset_number,
                name=payload.name,
                tracking_date=payload.tracking_date,
                check_duplicate=self.check_duplicates,
            )
        except db_manager.DuplicateAssetNumberError as exc:
            self.context.alert(str(exc))
            return False
        except GatewayError as exc:
            logger.error("Error adding asset: %s", exc)
            self.context.alert(f"Failed to add asset: {exc}")
            return False

        self.close()
        self.clear()
        await self.list_view.invalidate_and_resync()
        return True


class EditAssetForm(_AssetForm):
    """Edit dialog for an existing asset's number, name and tracking date."""

    def __init__(self, context: AppContext, list_view: ListViewModel):
        super().__init__(context)
        self.list_view = list_view
        self.asset_id: int | None = None

    def open_for(self, asset: Any) -> None:
        self.asset_id = asset.id
        self.draft = AssetDraft(
            asset_number=asset.asset_number,
            name=asset.name,
            tracking_date=asset.tracking_date,
        )
        self.is_open = True

    def clear(self) -> None:
        super().clear()
        self.asset_id = None

    async def submit(self) -> bool:
        if self.asset_id is None:
            raise RuntimeError("Edit form submitted without an asset")
        payload = self._validate(AssetUpdate)
        if payload is None:
            return False
        # AssetUpdate makes every field optional; the edit dialog requires all.
        if None in (payload.asset_number, payload.name, payload.tracking_date):
            self.context.alert("Please fill in: asset_number, name, tracking_date")
            return False

        try:
            await db_manager.update_asset(self.context.assets, self.asset_id, payload.model_dump())
        except (GatewayError, db_manager.AssetNotFoundError) as exc:
            logger.error("Error updating asset %s: %s", self.asset_id, exc)
            self.context.alert(f"Failed to update asset: {exc}")
            return False

        self.close()
        self.clear()
        await self.list_view.invalidate_and_resync()
        return True


class QuickReportForm(_AssetForm):
    """
    Public report form. A scanned code fills the asset number; the camera
    and decoding live outside this controller, which only receives the text.
    """

    SUCCESS_MESSAGE = "Report submitted"

    def __init__(self, context: AppContext):
        super().__init__(context)
        self.is_open = True
        self.scanner_open = False
        self.submitting = False

    def start_scanner(self) -> None:
        self.scanner_open = True

    def stop_scanner(self) -> None:
        self.scanner_open = False

    def on_scan(self, decoded_text: str) -> None:
        self.draft.asset_number = decoded_text
        self.scanner_open = False

    async def submit(self) -> bool:
        payload = self._validate(AssetCreate)
        if payload is None:
            return False

        self.submitting = True
        try:
            await db_manager.create_asset(
                self.context.assets,
                asset_number=payload.asset_number,
                name=payload.name,
                tracking_date=payload.tracking_date,
                check_duplicate=False,
            )
        except GatewayError as exc:
            logger.error("Error submitting report: %s", exc)
            self.context.alert("Report failed, please try again later")
            return False
        finally:
            self.submitting = False

        self.clear()
        self.context.alert(self.SUCCESS_MESSAGE)
        return True
