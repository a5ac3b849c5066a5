"""Shared test fixtures."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.wg_common.database import get_db_session


@pytest.fixture
def db_session() -> AsyncMock:
    """Stand-in AsyncSession: commit/rollback/execute are awaitable mocks."""
    return AsyncMock()


@pytest_asyncio.fixture
async def client(db_session: AsyncMock) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client with the DB dependency replaced by db_session.

    ASGITransport does not run the lifespan, so no database is contacted.
    """

    async def _override() -> AsyncGenerator[AsyncMock, None]:
        yield db_session

    app.dependency_overrides[get_db_session] = _override
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_db_session, None)
