"""
Tailors Backend - Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the test suite.
How:   Each test gets its own SQLite file under ``tmp_path`` through
       aiosqlite, an isolated app built with ``create_app(settings, engine)``
       and an HTTPX AsyncClient that talks to it over ASGITransport.

Fixture Hierarchy:
    settings ─┬─ engine ── schema_engine ── app ── client
              └─ auth_headers
    mock_db_session (no database at all)
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

import bcrypt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set before any tailors import: tailors.main builds a module-level app
# from the environment.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="tailors_test_"), "import.db"
)
os.environ["JWT_SECRET"] = "test-secret-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

from tailors.config import Settings  # noqa: E402
from tailors.database import build_engine  # noqa: E402
from tailors.main import create_app  # noqa: E402
from tailors.security import issue_token  # noqa: E402
from tailors.services.schema_service import bootstrap_schema  # noqa: E402

TEST_SECRET = "unit-test-signing-secret"
ADMIN_USERNAME = "karan"
ADMIN_PASSWORD = "needle-and-thread"
EXTRA_ORIGIN = "https://shop.example.com"

# Low cost factor keeps the suite fast
ADMIN_PASSWORD_HASH = bcrypt.hashpw(ADMIN_PASSWORD.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode("utf-8")


def make_settings(database_url: str, **overrides) -> Settings:
    values = {
        "database_url": database_url,
        "jwt_secret": TEST_SECRET,
        "frontend_origins": EXTRA_ORIGIN,
        "admin_username": ADMIN_USERNAME,
        "admin_password_hash": ADMIN_PASSWORD_HASH,
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return make_settings(f"sqlite+aiosqlite:///{tmp_path / 'tailors.db'}")


@pytest_asyncio.fixture
async def engine(settings):
    """Engine on an empty SQLite file; disposed after the test."""
    eng = build_engine(settings)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def schema_engine(engine):
    """Engine whose database already has the full schema."""
    await bootstrap_schema(engine)
    return engine


@pytest.fixture
def app(settings, schema_engine):
    return create_app(settings, schema_engine)


@pytest_asyncio.fixture
async def client(app):
    """
    HTTPX AsyncClient bound to the test app.

    ASGITransport does not run the lifespan; ``schema_engine`` has already
    created the tables.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers(settings):
    token = issue_token(
        subject=ADMIN_USERNAME,
        secret=settings.jwt_secret,
        expires_minutes=30,
        extra={"role": "admin"},
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession for service tests that need no database.

    Usage:
        mock_db_session.get.return_value = None
        with pytest.raises(NotFoundError): ...
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.add = MagicMock()
    return session
