"""Shared test fixtures."""

from collections.abc import Callable
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cinereserve.api.deps import get_current_user
from cinereserve.database import get_db
from cinereserve.main import create_app
from cinereserve.models import Base, Role, User
from cinereserve.schemas import SessionUser


def make_tx_ctx():
    @asynccontextmanager
    async def _ctx():
        yield

    return _ctx()


@pytest.fixture
def db() -> AsyncMock:
    """
    The mock session served to ``test_app``; configure it per test.

    ``begin()`` works as an async context manager.
    """
    db = AsyncMock()
    db.begin = MagicMock(side_effect=lambda: make_tx_ctx())
    db.add = MagicMock()
    db.add_all = MagicMock()
    return db


@pytest.fixture
def test_app(db: AsyncMock) -> FastAPI:
    """Full API app with the database replaced by a mock session."""
    app = create_app()

    async def override():
        yield db

    app.dependency_overrides[get_db] = override
    return app


@pytest.fixture
def login_as(test_app: FastAPI) -> Callable[..., SessionUser]:
    """Make every request to ``test_app`` come from the given user."""

    def _login(role: str = Role.CLIENT.value, user_id: int = 1, username: str = "alice"):
        user = SessionUser(id=user_id, username=username, role=role)
        test_app.dependency_overrides[get_current_user] = lambda: user
        return user

    return _login


# ---------------------------------------------------------------------------
# SQLite-backed store
# ---------------------------------------------------------------------------


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'cinereserve.db'}")

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def users(session_factory) -> dict[str, User]:
    """One user per role; passwords are not real bcrypt hashes."""
    async with session_factory() as db:
        created = {
            role: User(username=f"{role}-user", password="x", role=role)
            for role in Role.values()
        }
        db.add_all(created.values())
        await db.commit()
    return created
