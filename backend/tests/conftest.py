"""
Pytest fixtures for test database, client, and authentication.

Each test gets a fresh in-memory SQLite database (aiosqlite + StaticPool so
every connection sees the same memory database). The app's DB session and
clock dependencies are overridden; Redis is disabled so the cache is a no-op.
"""

import os
from datetime import date, datetime, timezone
from typing import AsyncGenerator

os.environ["ENVIRONMENT"] = "test"
os.environ["REDIS_ENABLED"] = "false"
os.environ["BLOB_STORAGE"] = "disabled"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.main import app
from app.api.deps import get_clock
from app.db.base import Base
from app.db.session import get_db
from app.core.security import create_access_token, hash_password
from app.models.booking import Booking
from app.models.error_report import ErrorReport
from app.models.institution import Institution
from app.models.resource import Resource
from app.models.user import User

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed "now" for every time-dependent rule under test
FROZEN_NOW = datetime(2025, 2, 1, 9, 30, tzinfo=timezone.utc)
FROZEN_TODAY = FROZEN_NOW.date()


def frozen_clock() -> datetime:
    return FROZEN_NOW


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables in a fresh memory database, yield a session, dispose."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with the DB session and clock overridden."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: frozen_clock

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _add(db_session: AsyncSession, entity):
    db_session.add(entity)
    await db_session.commit()
    await db_session.refresh(entity)
    return entity


@pytest_asyncio.fixture
async def institution(db_session: AsyncSession) -> Institution:
    return await _add(db_session, Institution(
        name="Central Library",
        open_time="08:00",
        close_time="20:00",
        booking_interval=30,
    ))


@pytest_asyncio.fixture
async def resource(db_session: AsyncSession, institution: Institution) -> Resource:
    return await _add(db_session, Resource(
        name="Study Room 1",
        description="Whiteboard and six seats",
        institution_id=institution.id,
    ))


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession, institution: Institution) -> User:
    return await _add(db_session, User(
        name="Test User",
        email="test@example.com",
        role="user",
        username="testuser",
        hashed_password=hash_password("testpassword123"),
        institution_id=institution.id,
    ))


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession, institution: Institution) -> User:
    return await _add(db_session, User(
        name="Admin",
        email="admin@example.com",
        role="admin",
        username="admin",
        hashed_password=hash_password("adminpassword123"),
        institution_id=institution.id,
    ))


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> dict:
    token = create_access_token(data={"sub": test_user.id, "role": test_user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def admin_headers(admin_user: User) -> dict:
    token = create_access_token(data={"sub": admin_user.id, "role": admin_user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def make_booking(db_session: AsyncSession, institution: Institution, resource: Resource, test_user: User):
    """Factory inserting bookings directly, bypassing the overlap guard."""

    async def _make(day: date, start: str = "10:00", end: str = "11:00", **overrides) -> Booking:
        fields = {
            "institution_id": institution.id,
            "user_id": test_user.id,
            "resource_id": resource.id,
            "date": day,
            "start_time": start,
            "end_time": end,
        }
        fields.update(overrides)
        return await _add(db_session, Booking(**fields))

    return _make


@pytest_asyncio.fixture
async def make_error_report(db_session: AsyncSession, resource: Resource, test_user: User):
    async def _make(resolved: bool = False, **overrides) -> ErrorReport:
        fields = {
            "resource_id": resource.id,
            "user_id": test_user.id,
            "description": "Projector flickers",
            "created_date": FROZEN_NOW,
            "resolved": resolved,
        }
        fields.update(overrides)
        return await _add(db_session, ErrorReport(**fields))

    return _make
