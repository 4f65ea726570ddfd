"""Test configuration and fixtures for DocShare."""

import itertools
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.core.db import Base, get_db
from app.core.security import create_user_token
from app.db import models  # noqa: F401
from app.db.repositories.user_repository import UserRepository
from app.main import app as fastapi_app


@pytest.fixture
async def engine(tmp_path):
    """Fresh SQLite database file per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'docshare.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_user(session_factory):
    """Create a user directly in the store and return its id."""
    counter = itertools.count(1)

    async def _make_user(name=None):
        n = next(counter)
        async with session_factory() as session:
            user = await UserRepository(session).create(
                name=name or f"user{n}",
                email=f"user{n}@example.com",
                password_hash="not-a-real-hash",
            )
            await session.commit()
        return user.id

    return _make_user


@pytest.fixture
def auth_headers():
    def _auth_headers(user_id):
        return {"Authorization": f"Bearer {create_user_token(user_id)}"}

    return _auth_headers


@pytest.fixture
async def client(session_factory):
    """Async HTTP client bound to the test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    fastapi_app.dependency_overrides.clear()
