"""
Async SQLAlchemy engine, session factory and schema bootstrap.

SQLite (aiosqlite) is the default for local runs and tests; PostgreSQL
(asyncpg) is used in production.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from utilitycrm.config import settings
from utilitycrm.models import Base

logger = logging.getLogger(__name__)


def _connect_args() -> dict:
    if settings.is_postgres:
        # Transaction poolers (Supabase, PgBouncer) reject prepared statements
        return {"statement_cache_size": 0}
    return {}


# NullPool: no connection outlives the event loop that opened it
engine = create_async_engine(
    settings.database_url,
    poolclass=NullPool,
    echo=False,
    connect_args=_connect_args(),
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def create_tables() -> None:
    """Create the catalog and ledger tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Database schema ready ({len(Base.metadata.tables)} tables)")


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request, committed on success."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Same transaction handling as get_db, for code outside a request
    (startup catalog seeding).
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
