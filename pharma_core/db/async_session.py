"""Async SQLAlchemy engine and session management.

The database is optional (the drug registry can run from the bundled CSV), so
the engine is created on first use rather than at import time.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from pharma_core.core.config import settings

logger = logging.getLogger(__name__)


def _to_async_uri(uri: str) -> str:
    if uri.startswith("postgresql+asyncpg://"):
        return uri
    if uri.startswith("postgresql+psycopg2://"):
        return uri.replace("postgresql+psycopg2://", "postgresql+asyncpg://", 1)
    if uri.startswith("postgresql://"):
        return uri.replace("postgresql://", "postgresql+asyncpg://", 1)
    if uri.startswith("postgres://"):
        return uri.replace("postgres://", "postgresql+asyncpg://", 1)
    return uri


@lru_cache(maxsize=1)
def get_async_engine() -> AsyncEngine:
    return create_async_engine(
        _to_async_uri(settings.sqlalchemy_database_uri),
        pool_pre_ping=True,
        pool_recycle=1800,
    )


@lru_cache(maxsize=1)
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=get_async_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def ping_database() -> bool:
    """Return True when the configured database answers ``SELECT 1``."""
    try:
        async with get_async_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except (SQLAlchemyError, OSError):
        logger.exception("Database ping failed; drug registry will use the CSV dataset")
        return False


async def dispose_engine() -> None:
    if get_async_engine.cache_info().currsize:
        await get_async_engine().dispose()
