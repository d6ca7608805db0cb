"""
Institute Portal Backend: Test Configuration (conftest.py)
===========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   No real database: services run against an AsyncMock session and
       routes are exercised through httpx with the service singletons
       patched.

Fixtures:
    ├── mock_db_session: AsyncMock database session
    ├── make_result: builds the object `await session.execute(...)` returns
    └── test_client: HTTPX AsyncClient bound to the FastAPI app

In-memory ORM rows for tests live in factories.py.
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

# Override settings for testing BEFORE any portal imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DEFAULT_LOCALE"] = "en"
os.environ["SUPPORTED_LOCALES"] = "en,ar"

from httpx import ASGITransport, AsyncClient  # noqa: E402


def build_result(scalar=None, scalars=None, count=None):
    """
    Mimics the Result returned by AsyncSession.execute().

    scalar:   value of scalar_one_or_none() / scalar_one()
    scalars:  list returned by scalars().all()
    count:    value of scalar() (COUNT queries)
    """
    result = MagicMock()
    result.scalar_one_or_none.return_value = scalar
    result.scalar_one.return_value = scalar
    result.scalars.return_value.all.return_value = scalars or []
    result.scalar.return_value = count
    return result


@pytest.fixture
def make_result():
    return build_result


@pytest.fixture
def mock_db_session():
    """
    Mock async database session.

    Usage:
        mock_db_session.execute.return_value = make_result(scalar=product)
        mock_db_session.execute.side_effect = [make_result(...), make_result(...)]
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    The database session dependency is replaced with a mock so route tests
    never open a connection; patch the service singleton under test.
    """
    from portal.database import get_db_session
    from portal.main import app

    async def _session():
        yield AsyncMock()

    app.dependency_overrides[get_db_session] = _session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()

