"""
VSRAdmin Backend - Database Engine & Sessions
==============================================

What:  Async SQLAlchemy engine and session factory for the SQL collaborators.
How:   `build_engine()` creates the pooled async engine; `build_session_factory()`
       wraps it. Both are called once by `main.build_default_services()` and
       handed to the SQL services, so nothing here is created at import time.
Who:   SQL service adapters, Alembic, and the SQL adapter tests.

Connection Pooling Strategy (PostgreSQL/asyncpg):
    pool_size:       persistent connections for normal load
    max_overflow:    temporary connections for spikes
    pool_pre_ping:   validates connections before use (stale after DB restart)
    pool_recycle:    recycles connections every hour

    SQLite (tests) ignores the pool settings.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from vsradmin.config import settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object, which Alembic reads for autogenerate.
    """
    pass


def build_engine(database_url: Optional[str] = None) -> AsyncEngine:
    url = database_url or settings.database_url
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=settings.log_level == "DEBUG")

    return create_async_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
        echo=settings.log_level == "DEBUG",
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: rows stay readable after commit when mapped to schemas
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create every table known to Base.metadata (tests and local SQLite runs)."""
    # Models register themselves on import
    from vsradmin.models import admin  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
