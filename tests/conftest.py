"""
Pytest configuration: in-memory SQLite per test, app dependencies overridden.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SEED_ADMIN", "false")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from steakz.config import Settings, get_settings
from steakz.core.security import create_access_token, hash_password
from steakz.crud.user import create_user
from steakz.db.base import Base
from steakz.db.session import get_async_session
from steakz.main import app
from steakz.models import RoleEnum

TEST_SETTINGS = Settings(
    DATABASE_URL="sqlite+aiosqlite://",
    JWT_SECRET="test-secret-key-for-testing-only",
    TIME_SLOTS=["13:00", "19:00"],
    SEED_ADMIN=False,
)


@pytest.fixture
def settings():
    return TEST_SETTINGS


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database for each test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory, settings):
    """Async test client with database and settings overrides."""

    async def override_get_async_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_settings] = lambda: settings
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    """Factory creating users straight in the database."""

    async def _make(username, role=RoleEnum.USER, password="secret123", created_by_id=None, email=None):
        return await create_user(
            db_session,
            username=username,
            password_hash=hash_password(password),
            role=role,
            email=email,
            created_by_id=created_by_id,
        )

    return _make


@pytest.fixture
def auth_headers(settings):
    def _headers(user):
        token = create_access_token(user.id, user.role.value, settings)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest_asyncio.fixture
async def admin(make_user):
    return await make_user("admin", RoleEnum.ADMIN)


@pytest_asyncio.fixture
async def manager(make_user):
    return await make_user("manager", RoleEnum.MANAGER)


@pytest_asyncio.fixture
async def cashier(make_user):
    return await make_user("cashier", RoleEnum.CASHIER)


@pytest_asyncio.fixture
async def customer(make_user):
    return await make_user("customer", RoleEnum.USER)


@pytest.fixture
def count_rows(session_factory):
    """Counts rows of a model using a fresh session."""

    async def _count(model):
        async with session_factory() as session:
            return (await session.execute(select(func.count()).select_from(model))).scalar_one()

    return _count
