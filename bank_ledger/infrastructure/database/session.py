"""Async SQLAlchemy engine and session management."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from bank_ledger.core.config import Settings, get_settings
from bank_ledger.infrastructure.database.base import Base

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
AsyncSessionFactory: async_sessionmaker[AsyncSession] | None = None


def is_sqlite(url: str) -> bool:
    return make_url(url).get_backend_name() == "sqlite"


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Make SQLite enforce the transfer -> account references like other backends."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def engine_options(settings: Settings) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": settings.database.echo or settings.debug}
    if is_sqlite(settings.database_url):
        return options

    # Server backends only
    options["pool_pre_ping"] = True
    if settings.database.pool_size is not None:
        options["pool_size"] = settings.database.pool_size
    if settings.database.max_overflow is not None:
        options["max_overflow"] = settings.database.max_overflow
    return options


def _build_engine(settings: Settings) -> AsyncEngine:
    engine = create_async_engine(settings.database_url, **engine_options(settings))
    if is_sqlite(settings.database_url):
        enable_sqlite_foreign_keys(engine)
    logger.info("Database engine created for backend %s", engine.dialect.name)
    return engine


def get_engine(settings: Settings | None = None) -> AsyncEngine:
    global _engine, AsyncSessionFactory
    if _engine is None:
        _engine = _build_engine(settings or get_settings())
        AsyncSessionFactory = async_sessionmaker(
            bind=_engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _engine


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    if AsyncSessionFactory is None:
        get_engine()

    assert AsyncSessionFactory is not None  # for mypy
    async with AsyncSessionFactory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create the ledger tables in development mode (migrations preferred)."""
    # Deferred import so the models register on Base without an import cycle
    from bank_ledger.infrastructure.database import models  # noqa: F401

    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    global _engine, AsyncSessionFactory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    AsyncSessionFactory = None
