# dashboard/context.py
"""
Application context shared by the dashboard controllers.

One AppContext is built when the dashboard starts and handed to every
controller that needs the active operator, the theme, the data gateways or a
way to alert the user. Nothing reads these from module globals.
"""
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from core.gateway import TableGateway
from db_models.asset import Asset
from db_models.preference import UserPreference
from api.preferences import db_manager as preference_manager

logger = logging.getLogger("repair_tracker.dashboard")


class NotAuthenticatedError(Exception):
    """Raised when a protected action runs without an operator logged in."""
    pass


class SessionStore:
    """Holds the name of the operator using the dashboard."""

    def __init__(self, username: str | None = None):
        self._username = None
        if username:
            self.login(username)

    @property
    def username(self) -> str | None:
        return self._username

    @property
    def is_authenticated(self) -> bool:
        return self._username is not None

    def login(self, username: str) -> str:
        username = (username or "").strip()
        if not username:
            raise ValueError("Operator name is required")
        self._username = username
        return username

    def logout(self) -> None:
        self._username = None

    def require(self) -> str:
        """Return the operator name, or raise so the caller can send the user to login."""
        if self._username is None:
            raise NotAuthenticatedError("No operator is logged in")
        return self._username


class ThemePreference:
    """Dark-mode flag of the session operator, persisted in user_preferences."""

    DARK_CLASS = "dark"

    def __init__(self, gateway: TableGateway, session: SessionStore):
        self.gateway = gateway
        self.session = session
        self.dark_mode = False

    async def load(self) -> bool:
        self.dark_mode = await preference_manager.get_dark_mode(self.gateway, self.session.require())
        return self.dark_mode

    async def toggle(self) -> bool:
        new_value = not self.dark_mode
        await preference_manager.set_dark_mode(self.gateway, self.session.require(), new_value)
        self.dark_mode = new_value
        return new_value

    def root_classes(self) -> set[str]:
        """Style classes to put on the root element."""
        return {self.DARK_CLASS} if self.dark_mode else set()


def _log_alert(message: str) -> None:
    logger.warning("alert: %s", message)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class AppContext:
    settings: object
    assets: TableGateway
    preferences: TableGateway
    session: SessionStore = field(default_factory=SessionStore)
    # Blocking user-facing message; the UI swaps in its own dialog.
    alert: Callable[[str], None] = _log_alert
    clock: Callable[[], datetime] = _utc_now
    theme: ThemePreference = field(init=False)

    def __post_init__(self):
        self.theme = ThemePreference(self.preferences, self.session)

    @classmethod
    def for_session(cls, db: AsyncSession, settings, **kwargs) -> "AppContext":
        """Build a context whose gateways share one database session."""
        return cls(
            settings=settings,
            assets=TableGateway(db, Asset),
            preferences=TableGateway(db, UserPreference),
            **kwargs,
        )

    @property
    def page_size(self) -> int:
        return getattr(self.settings, "PAGE_SIZE", 10)

    def now(self) -> datetime:
        return self.clock()

    def today(self) -> date:
        return self.clock().date()
