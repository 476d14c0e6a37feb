"""Shared fixtures for the planning tests."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from btu_planning.performers.store import InMemoryPerformerStore
from btu_planning.schema import metadata


@pytest.fixture
def store() -> InMemoryPerformerStore:
    return InMemoryPerformerStore()


@pytest_asyncio.fixture
async def engine():
    """In-memory SQLite database shared by every connection of the engine."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield engine
    await engine.dispose()
