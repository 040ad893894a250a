from datetime import date, datetime, timezone
from enum import Enum

from sqlalchemy import String, Date, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from db_base import Base


class AssetStatus(str, Enum):
    """Repair status of a tracked asset."""
    PENDING = "pending"
    COMPLETED = "completed"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Asset(Base):
    __tablename__ = "assets"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    # Not unique at the database level: duplicates are only checked best-effort
    # before insert.
    asset_number: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    tracking_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=AssetStatus.PENDING.value,
        server_default=AssetStatus.PENDING.value,
    )

    # Both set when completed, both null when pending
    completion_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    completed_by: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utc_now,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Asset id={self.id} number={self.asset_number!r} status={self.status}>"
