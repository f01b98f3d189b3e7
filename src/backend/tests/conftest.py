"""
Pytest fixtures for Likert Forms backend tests.
"""

import os
from collections.abc import AsyncGenerator
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment variables before importing app
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing")
os.environ.setdefault("ADMIN_API_KEY", "test-admin-key")
os.environ.setdefault("FIELD_ENCRYPTION_KEY", "a2tra2tra2tra2tra2tra2tra2tra2tra2tra2tra2s=")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SQLITE_BUSY_TIMEOUT_SECONDS", "10")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "false")

ADMIN_HEADERS = {"X-Admin-Key": "test-admin-key"}


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture
async def engine(tmp_path) -> AsyncGenerator[Any, None]:
    """File-backed SQLite engine with all tables created, one per test."""
    from db.session import create_db_engine, create_tables

    test_engine = create_db_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await create_tables(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: Any) -> Any:
    """Session factory bound to the test engine."""
    from db.session import create_session_factory

    return create_session_factory(engine)


@pytest.fixture
async def db_session(session_factory: Any) -> AsyncGenerator[Any, None]:
    """A real session against the test database."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def app(session_factory: Any) -> AsyncGenerator[Any, None]:
    """FastAPI application wired to the test database."""
    from db.session import get_db
    from main import app as fastapi_app

    async def override_get_db() -> AsyncGenerator[Any, None]:
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def client(app: Any) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return dict(ADMIN_HEADERS)


@pytest.fixture
def mock_session() -> AsyncMock:
    """Create a mock database session."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_submission() -> dict[str, Any]:
    """A valid submission body."""
    return {
        "respondent_name": "Jane Doe",
        "respondent_email": "jane@x.com",
        "role": "Engineer",
        "answers": [
            {"question_id": "q1", "value": 4},
            {"question_id": "q2", "value": {"rating": 5, "comment": "Good"}},
            {"question_id": "q3", "value": ["email", "slack"]},
            {"question_id": "q4", "value": "More focus time"},
        ],
    }
