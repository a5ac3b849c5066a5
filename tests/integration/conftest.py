"""Integration-test fixtures.

Requires PostgreSQL at DATABASE_URL with migrations applied
(alembic upgrade head). Every test here is skipped when the database is
unreachable or the wagers table is missing.

All integration tests share a single event loop so that the module-level
SQLAlchemy async engine pool stays valid across the session.
"""

import asyncio
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.main import app
from src.wg_common.database import async_session_factory, engine


@pytest_asyncio.fixture(loop_scope="session", scope="session", autouse=True)
async def database() -> AsyncGenerator[None, None]:
    try:
        async with asyncio.timeout(5):
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1 FROM wagers LIMIT 1"))
    except (OSError, SQLAlchemyError, TimeoutError) as exc:
        pytest.skip(f"PostgreSQL not available for integration tests: {exc!r}")
    yield
    await engine.dispose()


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def live_client() -> AsyncGenerator[AsyncClient, None]:
    """HTTP client wired to the real database session dependency."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def session_factory():
    return async_session_factory
