"""Async engine, session factory and the request-scoped session dependency.

PostgreSQL (asyncpg) in deployed environments, SQLite (aiosqlite) for local
development and tests. Services own their transactions and commit
explicitly; ``get_db`` only guarantees the session is closed.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from lifeboard.config import settings
from lifeboard.logger import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""


def is_sqlite(database_url: str) -> bool:
    return database_url.startswith("sqlite")


def _engine_options(database_url: str) -> dict[str, Any]:
    if is_sqlite(database_url):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_size": 10,
        "max_overflow": 20,
        "pool_recycle": 3600,
    }


def build_engine(database_url: str, **overrides: Any) -> AsyncEngine:
    """Engine with the pool settings appropriate for ``database_url``'s backend."""
    options = {"echo": settings.debug, **_engine_options(database_url), **overrides}
    return create_async_engine(database_url, **options)


engine = build_engine(settings.database_url)

async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

# Tests point request handlers at their own database through this hook
_test_session_maker: async_sessionmaker[AsyncSession] | None = None


def set_test_session_maker(
    maker: async_sessionmaker[AsyncSession] | None,
) -> async_sessionmaker[AsyncSession] | None:
    """Install (or clear, with None) the test session maker; returns the previous one."""
    global _test_session_maker
    previous = _test_session_maker
    _test_session_maker = maker
    return previous


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    maker = _test_session_maker or async_session_maker
    async with maker() as session:
        yield session


async def init_db() -> None:
    """Create tables directly on SQLite; other backends are migrated with Alembic."""
    if not is_sqlite(settings.database_url):
        logger.info("Database schema managed by migrations")
        return

    import lifeboard.models  # noqa: F401  registers every table on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized (sqlite create_all)")
