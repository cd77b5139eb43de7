"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("ENV", "test")
os.environ["BUSINESS_TIMEZONE"] = "UTC"
os.environ["SLOT_STEP_MINUTES"] = "30"

from datetime import datetime, time  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402

from app.api.deps import get_now, get_session  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Availability, Client, Service  # noqa: E402

# Monday 2026-03-02, 07:00 UTC
NOW = datetime(2026, 3, 2, 7, 0)
MONDAY = NOW.date()


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def session(session_maker):
    async with session_maker() as s:
        yield s


@pytest.fixture
async def api(session_maker):
    """HTTP client against the app with the test database and a pinned clock."""

    async def _session():
        async with session_maker() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    app.dependency_overrides[get_session] = _session
    app.dependency_overrides[get_now] = lambda: NOW
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def seeded(session_maker):
    """One client, a 60-min and a 30-min service, Monday 08:00-10:00 and 13:00-14:00."""
    async with session_maker() as s:
        client = Client(email="jane@example.com", name="Jane Client")
        training = Service(name="Personal Training", duration_mins=60, price=Decimal("95.00"))
        stretch = Service(name="Assisted Stretch", duration_mins=30, price=Decimal("45.00"))
        retired = Service(name="Retired Class", duration_mins=60, price=Decimal("20.00"), is_active=False)
        s.add_all(
            [
                client,
                training,
                stretch,
                retired,
                Availability(day_of_week=1, start_time=time(8, 0), end_time=time(10, 0)),
                Availability(day_of_week=1, start_time=time(13, 0), end_time=time(14, 0)),
            ]
        )
        await s.commit()
        return {
            "client_id": client.id,
            "training_id": training.id,
            "stretch_id": stretch.id,
            "retired_id": retired.id,
        }
