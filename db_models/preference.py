from datetime import datetime

from sqlalchemy import String, Boolean, DateTime, false, func
from sqlalchemy.orm import Mapped, mapped_column

from db_base import Base


class UserPreference(Base):
    """Per-operator display preferences that survive across sessions."""
    __tablename__ = "user_preferences"

    username: Mapped[str] = mapped_column(
        String(100),
        primary_key=True,
    )

    dark_mode: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        onupdate=func.now(),
    )
