"""Async SQLAlchemy engine and session factory builders.

The engine is created once by the application container and handed to the
repositories explicitly; nothing in this module keeps global state.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from catalog.core.config import Settings

from .base import Base


def build_engine(settings: Settings) -> AsyncEngine:
    engine_kwargs: dict[str, Any] = {
        "echo": settings.database.echo or settings.debug,
    }
    if settings.database.pool_size is not None:
        engine_kwargs["pool_size"] = settings.database.pool_size
    if settings.database.max_overflow is not None:
        engine_kwargs["max_overflow"] = settings.database.max_overflow

    engine = create_async_engine(settings.database_url, **engine_kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _register_sqlite_functions)
    return engine


def _unicode_lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_connection, connection_record) -> None:
    # SQLite's built-in lower() only folds ASCII; ILIKE compiles to lower() LIKE lower().
    dbapi_connection.create_function("lower", 1, _unicode_lower)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create database tables in development mode (migrations preferred)."""
    from . import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
