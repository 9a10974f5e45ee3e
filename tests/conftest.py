import os
from datetime import date, datetime

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENV", "test")
os.environ.setdefault("SUGGESTION_BACKEND", "rules")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

import app.models  # noqa: F401 - register tables
from app.core.db import get_session
from app.main import app as fastapi_app
from app.models.booking import Booking, TimeSlot
from app.models.screen import Screen
from app.services.slot_service import normalize_booking_date

DAY = date(2025, 3, 10)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
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
    async with session_maker() as session:
        yield session


@pytest.fixture
async def screens(session) -> list[Screen]:
    rows = [
        Screen(name="Screen A", location="Main Hall", specs='55" LED'),
        Screen(name="Screen B", location="Library", specs='70" LCD'),
        Screen(name="Screen C", location="Cafeteria", specs='42" LCD'),
    ]
    session.add_all(rows)
    await session.commit()
    for row in rows:
        await session.refresh(row)
    return rows


async def add_booking(session, screen_id: int, day: date, slot: TimeSlot, name: str = "Jane Doe") -> Booking:
    booking = Booking(
        screen_id=screen_id,
        date=normalize_booking_date(day),
        time_slot=slot.value,
        user_name=name,
        user_contact_number="5550001234",
    )
    session.add(booking)
    await session.commit()
    await session.refresh(booking)
    return booking


@pytest.fixture
async def client(session_maker):
    async def override_get_session():
        async with session_maker() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    fastapi_app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://test") as c:
        yield c
    fastapi_app.dependency_overrides.clear()


def at(day: date, hour: int = 0, minute: int = 0) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute)
