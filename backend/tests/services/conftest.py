"""Service test fixtures — async DB + FastAPI test client + registered users.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe hits the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - StaticPool: every session of one test sees the same in-memory database
    - Users registered through the API, so fixtures exercise the real registration path
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from todolist.db.base import Base
from todolist.infrastructure.database import get_db, DatabaseSessionManager
import todolist.infrastructure.database as db_module
import todolist.models  # noqa: F401
from todolist.main import app


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
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def register(client):
    """Register a user through the API; returns id, email and auth headers."""
    async def _register(user_name: str) -> dict:
        res = await client.post("/api/v1/users", json={
            "first_name": user_name.capitalize(),
            "user_name": user_name,
            "email": f"{user_name}@example.com",
        })
        assert res.status_code == 201, res.text
        body = res.json()
        return {
            "id": body["id"],
            "email": body["email"],
            "headers": {"X-User-Id": body["id"]},
        }
    return _register


@pytest.fixture
async def alice(register):
    return await register("alice")


@pytest.fixture
async def bob(register):
    return await register("bob")


@pytest.fixture
async def carol(register):
    return await register("carol")


@pytest.fixture
def make_task(client):
    """Create a list (if needed) and a task owned by user; returns the task JSON."""
    async def _make_task(user: dict, title: str = "Buy milk", **fields) -> dict:
        list_id = fields.pop("task_list_id", None)
        if list_id is None:
            res = await client.post(
                "/api/v1/task-lists", json={"title": "Inbox"},
                headers=user["headers"],
            )
            assert res.status_code == 201, res.text
            list_id = res.json()["id"]
        res = await client.post(
            f"/api/v1/task-lists/{list_id}/tasks",
            json={"title": title, **fields},
            headers=user["headers"],
        )
        assert res.status_code == 201, res.text
        return res.json()
    return _make_task
