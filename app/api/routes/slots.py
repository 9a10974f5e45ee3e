from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_session
from app.api.schemas.screen import BookedSlotsResponse, SlotAvailability
from app.models.booking import TIME_SLOTS
from app.services.slot_service import get_slot_availability

router = APIRouter(prefix="/slots", tags=["slots"])


@router.get("", response_model=list[str])
async def time_slots() -> list[str]:
    """The fixed bookable periods of a day, in display order."""
    return [s.value for s in TIME_SLOTS]


@router.get("/booked", response_model=BookedSlotsResponse)
async def booked_slots(
    screen_id: int = Query(...),
    date_param: date = Query(..., alias="date"),
    session: AsyncSession = Depends(get_session),
) -> BookedSlotsResponse:
    """Booked periods of a screen on a day, for greying out the slot picker."""
    availability = await get_slot_availability(session, screen_id, date_param)
    return BookedSlotsResponse(
        screen_id=screen_id,
        date=date_param.isoformat(),
        booked=[s.value for s, avail in availability if not avail],
        slots=[SlotAvailability(time_slot=s.value, available=avail) for s, avail in availability],
    )
