"""
Records Service - Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── mock_db_session: AsyncMock session for service unit tests (no DB)
    ├── settings:        Settings pointing at a fresh SQLite file per test
    ├── app:             Application with the records table created
    ├── test_client:     HTTPX AsyncClient bound to `app`
    └── broken_client:   Client whose database has no records table, so every
                         statement fails
"""

from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from records_service.config import Settings
from records_service.database import Base
from records_service.main import create_app
from records_service.models.record import Record  # noqa: F401


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_record(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = record
            result = await record_service.get_record(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    return session


@pytest.fixture
def sample_record_data():
    """Column values of one stored record."""
    return {"id": 7, "name": "Tom", "type": "cat"}


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings backed by a SQLite file unique to the test."""
    return Settings(
        loglevel="warning",
        listen="127.0.0.1:8080",
        db={"url": f"sqlite+aiosqlite:///{tmp_path / 'records.db'}"},
    )


@pytest_asyncio.fixture
async def app(settings):
    """Application with an empty records table. Lifespan is not run."""
    application = create_app(settings)
    async with application.state.db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield application
    await application.state.db.dispose()


@pytest_asyncio.fixture
async def test_client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/records")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def broken_client(settings) -> AsyncGenerator[AsyncClient, None]:
    """Client for an app whose database lacks the records table."""
    application = create_app(settings)
    transport = ASGITransport(app=application)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    await application.state.db.dispose()
