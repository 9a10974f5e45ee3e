from datetime import date, datetime, time, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models.booking import TIME_SLOTS, Booking, TimeSlot


def _calendar_day(value: date | datetime) -> date:
    # datetime is a date subclass; take the day as the caller wrote it, tz or not
    if isinstance(value, datetime):
        return value.date()
    return value


def normalize_booking_date(value: date | datetime) -> datetime:
    """Pin a booking date to the neutral hour of its calendar day (naive, idempotent)."""
    d = _calendar_day(value)
    return datetime(d.year, d.month, d.day, settings.booking_date_hour, 0, 0)


def day_bounds(value: date | datetime) -> tuple[datetime, datetime]:
    """Inclusive (00:00:00.000, 23:59:59.999) bounds of the calendar day."""
    d = _calendar_day(value)
    start = datetime.combine(d, time(0, 0, 0))
    end = start + timedelta(days=1) - timedelta(milliseconds=1)
    return start, end


def slot_label(slot: TimeSlot | str) -> str:
    return slot.value if isinstance(slot, TimeSlot) else str(slot)


async def count_bookings(
    session: AsyncSession,
    screen_id: int,
    day: date | datetime,
    time_slot: TimeSlot | str | None = None,
) -> int:
    """Bookings for the screen on the day, optionally restricted to one slot."""
    start, end = day_bounds(day)
    q = select(func.count(Booking.id)).where(
        Booking.screen_id == screen_id,
        Booking.date >= start,
        Booking.date <= end,
    )
    if time_slot is not None:
        q = q.where(Booking.time_slot == slot_label(time_slot))
    result = await session.execute(q)
    return int(result.scalar_one())


async def get_booked_slots(
    session: AsyncSession, screen_id: int, day: date | datetime
) -> list[TimeSlot]:
    """Booked slots of the screen on the day, in display order."""
    start, end = day_bounds(day)
    result = await session.execute(
        select(Booking.time_slot).where(
            Booking.screen_id == screen_id,
            Booking.date >= start,
            Booking.date <= end,
        )
    )
    booked = {row[0] for row in result.all()}
    return [s for s in TIME_SLOTS if s.value in booked]


async def get_booked_slots_by_screen(
    session: AsyncSession, screen_ids: list[int], day: date | datetime
) -> dict[int, set[str]]:
    """Map of screen id -> booked slot labels on the day, for every id given."""
    out: dict[int, set[str]] = {sid: set() for sid in screen_ids}
    if not screen_ids:
        return out
    start, end = day_bounds(day)
    result = await session.execute(
        select(Booking.screen_id, Booking.time_slot).where(
            Booking.screen_id.in_(screen_ids),
            Booking.date >= start,
            Booking.date <= end,
        )
    )
    for screen_id, label in result.all():
        out.setdefault(screen_id, set()).add(label)
    return out


async def get_slot_availability(
    session: AsyncSession, screen_id: int, day: date | datetime
) -> list[tuple[TimeSlot, bool]]:
    """Returns list of (slot, available) in display order."""
    booked = set(await get_booked_slots(session, screen_id, day))
    return [(s, s not in booked) for s in TIME_SLOTS]
