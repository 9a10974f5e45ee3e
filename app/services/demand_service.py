import logging
from datetime import date, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models.booking import TimeSlot
from app.models.demand import DemandInfo, DemandLevel
from app.services.slot_service import count_bookings

logger = logging.getLogger(__name__)

HIGH_DEMAND_MESSAGE = "This specific slot is already booked or has high interest."
MEDIUM_DEMAND_MESSAGE = "This screen has multiple bookings today."
UNKNOWN_DEMAND_MESSAGE = "Could not determine demand."


async def classify_demand(
    session: AsyncSession,
    screen_id: int,
    day: date | datetime,
    time_slot: TimeSlot | str,
) -> DemandInfo:
    """Classify contention for (screen, day, slot) from current booking counts.

    A booked slot is high demand; a screen with `medium_demand_threshold` or more
    bookings that day is medium; anything else is low. Storage failures fail open
    to low so the booking flow is never blocked by this hint.
    """
    try:
        slot_count = await count_bookings(session, screen_id, day, time_slot)
        if slot_count > 0:
            return DemandInfo(level=DemandLevel.HIGH, message=HIGH_DEMAND_MESSAGE)
        daily_count = await count_bookings(session, screen_id, day)
        if daily_count >= settings.medium_demand_threshold:
            return DemandInfo(level=DemandLevel.MEDIUM, message=MEDIUM_DEMAND_MESSAGE)
        return DemandInfo(level=DemandLevel.LOW)
    except Exception as e:
        logger.exception("Demand check failed for screen=%s day=%s: %s", screen_id, day, e)
        return DemandInfo(level=DemandLevel.LOW, message=UNKNOWN_DEMAND_MESSAGE)
