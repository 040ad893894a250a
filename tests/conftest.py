import os

# Settings are chosen at import time; select the test profile first.
os.environ["MODE"] = "test"

from datetime import datetime, timezone

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from main import app as fastapi_app
import db as project_db
import db_models  # noqa: F401  ensure models are registered
from db_base import Base
from db_models.asset import Asset
from config import settings
from core.gateway import TableGateway
from core.security import create_access_token
from dashboard.context import AppContext, SessionStore

# "Now" for the dashboard controllers: today is 2025-02-28, tomorrow 2025-03-01
FIXED_NOW = datetime(2025, 2, 28, 9, 30, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def session_factory(tmp_path):
    """A fresh SQLite database per test."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'repair_tracker.db'}",
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )
    yield factory
    await engine.dispose()


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def asset_gateway(db_session):
    return TableGateway(db_session, Asset)


@pytest.fixture
def alerts():
    """Messages the dashboard would have shown in a blocking dialog."""
    return []


@pytest.fixture
def context(db_session, alerts):
    return AppContext.for_session(
        db_session,
        settings,
        session=SessionStore("alice"),
        alert=alerts.append,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
async def async_client(session_factory):
    # Point the get_session dependency at this test's database
    async def override_get_session():
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[project_db.get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://testserver") as ac:
        yield ac

    # Clean up
    fastapi_app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def alice_headers():
    """Authorization headers for operator 'alice'."""
    return {"Authorization": f"Bearer {create_access_token('alice')}"}


@pytest.fixture(scope="session")
def bob_headers():
    """Authorization headers for operator 'bob'."""
    return {"Authorization": f"Bearer {create_access_token('bob')}"}
