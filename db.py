# db.py
from collections.abc import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)

from config import settings
from db_base import Base


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Async engine for `url`. Server databases get connection health checks;
    SQLite files (used by the tests) take no pool options.
    """
    if not url:
        raise RuntimeError("DATABASE_URL is not configured")
    options = {"echo": echo}
    if make_url(url).get_backend_name() != "sqlite":
        options.update(pool_pre_ping=True, pool_size=5, max_overflow=10)
    return create_async_engine(url, **options)


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def init_db() -> None:
    """
    Create missing tables from the ORM metadata (seeding and development).
    Deployed databases are migrated with the scripts in alembic/versions.
    """
    import db_models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    await engine.dispose()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    async with AsyncSessionLocal() as session:
        yield session
