"""
Pytest configuration and fixtures.
"""

import os
import tempfile

# API tests run the real app against a throwaway SQLite file
TEST_DB_PATH = os.path.join(tempfile.mkdtemp(prefix="utilitycrm-"), "test.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ.setdefault("SEED_CATALOG", "true")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from utilitycrm.models import Base


# Service-level tests use an in-memory database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def db_engine():
    """Create test database engine."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Create test database session."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def client():
    """Application client with a fresh, seeded database."""
    from utilitycrm.main import app

    with TestClient(app) as test_client:
        yield test_client

    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)
