"""Shared test fixtures and helpers."""

import os

# Settings are read at import time; keep the app off Postgres during tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from datetime import date, datetime, timedelta
from typing import Optional

import pytest
import pytz
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from smartconnect.core.permissions import RequestContext, UserRole
from smartconnect.core.security import create_access_token, get_password_hash
from smartconnect.db.database import Base, get_db
from smartconnect.main import create_application
from smartconnect.models.service import Service
from smartconnect.models.user import User

# 2030-01-07 is a Monday
MONDAY = date(2030, 1, 7)
TUESDAY = MONDAY + timedelta(days=1)

# Far enough before MONDAY that the default 24h notice never filters
EARLY_NOW = pytz.UTC.localize(datetime(2030, 1, 1, 8, 0))


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


async def make_user(
    db: AsyncSession,
    name: str,
    user_type: UserRole,
    timezone: Optional[str] = None,
) -> User:
    user = User(
        email=f"{name.lower().replace(' ', '.')}@example.com",
        password_hash=get_password_hash("password123"),
        name=name,
        user_type=user_type,
        timezone=timezone,
        is_active=True,
    )
    db.add(user)
    await db.flush()
    return user


@pytest.fixture
async def provider(db):
    user = await make_user(db, "Pat Provider", UserRole.PROVIDER)
    await db.commit()
    return user


@pytest.fixture
async def seeker(db):
    user = await make_user(db, "Sam Seeker", UserRole.SEEKER)
    await db.commit()
    return user


@pytest.fixture
async def other_seeker(db):
    user = await make_user(db, "Olive Other", UserRole.SEEKER)
    await db.commit()
    return user


@pytest.fixture
async def service(db, provider):
    svc = Service(provider_id=provider.id, title="Haircut", category="Beauty", pricing="$30")
    db.add(svc)
    await db.commit()
    return svc


def context_for(user: User) -> RequestContext:
    return RequestContext(actor_id=user.id, role=user.user_type)


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(subject=str(user.id), role=user.user_type.value)
    return {"Authorization": f"Bearer {token}"}


def next_monday(weeks_ahead: int = 2) -> date:
    """A Monday at least a week in the future, for tests that use the real clock."""
    today = date.today()
    return today + timedelta(days=(7 - today.weekday()) + 7 * (weeks_ahead - 1))


@pytest.fixture
async def client(session_maker):
    app = create_application()

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
