"""Shared fixtures: an in-memory SQLite database per test and an HTTP client bound to it."""
import os

# Must be set before app.core.config is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_async_session
from app.core.security import create_access_token
from app.crud.user import create_user
from app.main import app as fastapi_app


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def user(db):
    return await create_user("alex@example.com", db, full_name="Alex Doe")


@pytest.fixture
async def other_user(db):
    return await create_user("sam@example.com", db)


@pytest.fixture
async def anon_client(session_factory):
    async def override_get_async_session():
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_async_session] = override_get_async_session
    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://test") as c:
        yield c
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def client(anon_client, user):
    anon_client.headers["Authorization"] = f"Bearer {create_access_token(str(user.id))}"
    return anon_client
