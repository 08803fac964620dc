"""
Tailors Backend - Database Engine and Session Management
========================================================

What:  Async SQLAlchemy engine factory, session factory, declarative base,
       per-request session dependency and the connectivity probe.
How:   ``build_engine`` turns Settings into an AsyncEngine; ``create_app``
       stores the engine and its session factory on ``app.state``; route
       handlers receive sessions through ``get_db_session``.
When:  Engine is built once at app creation; sessions are created per request.

Connection Pooling:
    pool_size / max_overflow / pool_pre_ping come from Settings.
    pool_recycle=3600 recycles connections every hour.
    SQLite (tests, local runs) uses SQLAlchemy's default pool for the driver,
    and foreign keys are switched on per connection so ON DELETE CASCADE works.
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncConnection,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from tailors.config import Settings
from tailors.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    ``Base.metadata`` is what the schema bootstrapper creates at startup.
    """
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured database.

    Echoes SQL when LOG_LEVEL is DEBUG.
    """
    if settings.is_sqlite:
        engine = create_async_engine(
            settings.database_url,
            echo=settings.log_level == "DEBUG",
        )
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
        echo=settings.log_level == "DEBUG",
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False keeps ORM attributes readable after commit
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def ping(conn: AsyncConnection) -> None:
    """Runs the trivial query used by startup and /health."""
    await conn.execute(text("SELECT 1"))


async def check_connectivity(engine: AsyncEngine) -> None:
    """
    Verify the data store answers a trivial query.

    Raises:
        StoreUnavailableError: connection or query failed. The driver
        exception is chained and its text kept in ``context``.
    """
    try:
        async with engine.connect() as conn:
            await ping(conn)
    except Exception as exc:
        raise StoreUnavailableError(
            message=f"Database connection failed: {exc}",
            context={"error": str(exc)},
        ) from exc


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Commits when the handler returns normally, rolls back when it raises.
    The exception is re-raised so the global handlers can answer.
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
