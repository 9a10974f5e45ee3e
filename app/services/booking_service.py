import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError, NotFoundError
from app.models.booking import Booking, BookingCreate
from app.models.screen import Screen
from app.services.screen_service import get_screen
from app.services.slot_service import count_bookings, normalize_booking_date

logger = logging.getLogger(__name__)

SLOT_TAKEN_MESSAGE = "This time slot is already booked. Please select another."


async def create_booking(session: AsyncSession, data: BookingCreate) -> Booking:
    """Persist a booking for (screen, day, slot).

    The existence check catches slots booked while the form was being filled in;
    the unique constraint on (screen_id, date, time_slot) settles concurrent inserts.
    """
    screen = await get_screen(session, data.screen_id)
    if not screen:
        raise NotFoundError("Screen not found.")
    day = normalize_booking_date(data.date)
    if await count_bookings(session, data.screen_id, day, data.time_slot):
        raise ConflictError(SLOT_TAKEN_MESSAGE)
    booking = Booking(
        screen_id=data.screen_id,
        date=day,
        time_slot=data.time_slot.value,
        user_name=data.user_name,
        user_contact_number=data.user_contact_number,
    )
    session.add(booking)
    try:
        await session.flush()
    except IntegrityError as e:
        await session.rollback()
        logger.info("Lost booking race for screen=%s day=%s slot=%s", data.screen_id, day, data.time_slot.value)
        raise ConflictError(SLOT_TAKEN_MESSAGE) from e
    await session.refresh(booking)
    logger.info("Booking %s created: screen=%s day=%s slot=%s", booking.id, booking.screen_id, day.date(), booking.time_slot)
    return booking


async def get_booking_with_screen(
    session: AsyncSession, booking_id: int
) -> tuple[Booking, Screen] | None:
    result = await session.execute(
        select(Booking, Screen)
        .join(Screen, Booking.screen_id == Screen.id)
        .where(Booking.id == booking_id)
    )
    row = result.first()
    return (row[0], row[1]) if row else None


async def list_all_bookings_with_screens(session: AsyncSession) -> list[tuple[Booking, Screen]]:
    """All bookings with their screen, newest first (admin)."""
    result = await session.execute(
        select(Booking, Screen)
        .join(Screen, Booking.screen_id == Screen.id)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
    )
    return [(b, s) for b, s in result.all()]


async def delete_booking(session: AsyncSession, booking_id: int) -> bool:
    result = await session.execute(select(Booking).where(Booking.id == booking_id))
    booking = result.scalar_one_or_none()
    if not booking:
        return False
    await session.delete(booking)
    await session.flush()
    return True
