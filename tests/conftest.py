"""Shared test fixtures: in-memory SQLite database and ASGI test clients.

Every test gets a fresh database. Most route tests override ``get_db``; the
``live_db`` and ``unreachable_db`` fixtures swap in a real manager instead.
"""

import os

# Settings are read at import time, so these must be in place first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from dottie import database
from dottie.api.dependencies import get_user_service
from dottie.database import DatabaseManager, get_db
from dottie.main import app
from dottie.models import Base, User


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def seed_users(test_db):
    """Insert three users: two active regular users and an inactive admin."""
    users = [
        User(email="ada@example.com", first_name="Ada", last_name="Lovelace", role="user"),
        User(email="grace@example.com", first_name="Grace", last_name="Hopper", role="user"),
        User(email="root@example.com", first_name="Root", last_name="Admin", role="admin", is_active=False),
    ]
    for user in users:
        test_db.add(user)
        await test_db.commit()
    for user in users:
        await test_db.refresh(user)
    return users


@pytest.fixture
async def client(test_session_factory):
    """Test client with the DB dependency pointed at the test database."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


class RecordingUserService:
    """Stands in for the user service and remembers every call it receives."""

    def __init__(self):
        self.calls = []
        self.status_code = 200
        self.fail_with = None

    def _record(self, *call):
        self.calls.append(call)
        if self.fail_with is not None:
            raise self.fail_with

    async def list_users(self, db, page=1, limit=10, role=None, is_active=None):
        self._record("list_users", page, limit, role, is_active)
        data = {"users": [], "total_count": 0, "page": page, "limit": limit, "total_pages": 0}
        return (data if self.status_code == 200 else None), self.status_code

    async def get_user_by_id(self, user_id, db):
        self._record("get_user_by_id", user_id)
        return ({"id": user_id} if self.status_code == 200 else None), self.status_code

    async def update_user(self, user_id, user_data, db):
        self._record("update_user", user_id, user_data)
        return ({"id": user_id} if self.status_code == 200 else None), self.status_code

    async def delete_user(self, user_id, db):
        self._record("delete_user", user_id)
        return self.status_code == 200, self.status_code


@pytest.fixture
def recording_service():
    return RecordingUserService()


@pytest.fixture
async def routed_client(recording_service):
    """Test client whose user routes hit a recording service and no database."""
    async def override_get_db():
        yield None

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_user_service] = lambda: recording_service

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def live_db(monkeypatch):
    """A real database manager on in-memory SQLite, installed as the app's manager."""
    manager = DatabaseManager("sqlite+aiosqlite:///:memory:")
    monkeypatch.setattr(database, "_db_manager", manager)
    yield manager
    await manager.close()


@pytest.fixture
async def unreachable_db(monkeypatch, tmp_path):
    """A database manager whose SQLite file lives in a directory that does not exist."""
    manager = DatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dottie.db'}")
    monkeypatch.setattr(database, "_db_manager", manager)
    yield manager
    await manager.close()


@pytest.fixture
async def live_client():
    """Test client with no dependency overrides: requests go through the real get_db."""
    app.dependency_overrides.clear()
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
