"""
Pytest configuration and fixtures for testing.

Repositories, commands and endpoints run against an in-memory SQLite
database (aiosqlite) built per test, so no external services are needed.
"""

import os
from datetime import datetime, timedelta, timezone

# Set required environment variables for testing before importing app modules
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DB_CREATE_TABLES", "true")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_FILE_PATH", os.devnull)

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from socialnet.models import Session
from socialnet.schemas.user import UserContext
from socialnet.settings import Settings
from socialnet.storage.db import Database
from tests.mocks.data import make_user


@pytest_asyncio.fixture
async def db():
    """
    Provides a fresh in-memory database with all tables created.

    Yields:
        Database: Store handle bound to the test's event loop.
    """
    database = Database.from_settings(
        Settings(DATABASE_URL_OVERRIDE="sqlite+aiosqlite:///:memory:")
    )
    await database.create_tables()
    yield database
    await database.dispose()


@pytest_asyncio.fixture
async def session(db):
    async with db.session() as session:
        yield session

@pytest_asyncio.fixture
async def users(db):
    """
    Seeds alice, bob and carol, each with an active session.

    Returns:
        dict: username -> User
    """
    created = {name: make_user(name) for name in ("alice", "bob", "carol")}
    async with db.session() as session:
        for user in created.values():
            session.add(user)
            session.add(
                Session(
                    id=f"token-{user.username}",
                    user_id=user.id,
                    expires_at=datetime.now(timezone.utc) + timedelta(days=1),
                )
            )
    return created


@pytest.fixture
def alice_ctx(users) -> UserContext:
    alice = users["alice"]
    return UserContext(
        id=alice.id, username=alice.username, display_name=alice.display_name
    )

@pytest.fixture
def app(db):
    """Full application wired to the test database."""
    from socialnet import application

    return application(database=db)


@pytest_asyncio.fixture
async def client(app, users):
    """
    HTTP client authenticated as alice.

    The ASGI transport does not run the lifespan, so the database handle
    from the ``db`` fixture is used as is.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Authorization": "Bearer token-alice"},
    ) as client:
        yield client


@pytest_asyncio.fixture
async def anonymous_client(app, users):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client
