from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_admin, get_session
from app.api.schemas.booking import BookingCreatedResponse, BookingDetail, BookingRequest
from app.models.admin import Admin
from app.models.booking import Booking, BookingCreate
from app.models.screen import Screen, ScreenPublic
from app.services.booking_service import (
    create_booking,
    delete_booking,
    get_booking_with_screen,
    list_all_bookings_with_screens,
)

router = APIRouter(prefix="/bookings", tags=["bookings"])


def _to_detail(b: Booking, s: Screen) -> BookingDetail:
    return BookingDetail(
        id=b.id,
        screen_id=b.screen_id,
        date=b.date,
        time_slot=b.time_slot,
        user_name=b.user_name,
        user_contact_number=b.user_contact_number,
        created_at=b.created_at,
        screen=ScreenPublic.model_validate(s, from_attributes=True),
    )


@router.post("", response_model=BookingCreatedResponse, status_code=status.HTTP_201_CREATED)
async def book_screen(
    body: BookingRequest,
    session: AsyncSession = Depends(get_session),
) -> BookingCreatedResponse:
    data = BookingCreate(
        screen_id=body.screen_id,
        date=datetime(body.date.year, body.date.month, body.date.day),
        time_slot=body.time_slot,
        user_name=body.user_name,
        user_contact_number=body.user_contact_number,
    )
    booking = await create_booking(session, data)
    return BookingCreatedResponse(booking_id=booking.id)


@router.get("", response_model=list[BookingDetail])
async def list_all_bookings_admin(
    session: AsyncSession = Depends(get_session),
    current_admin: Admin = Depends(get_current_admin),
) -> list[BookingDetail]:
    """Admin endpoint: every booking with its screen, newest first."""
    rows = await list_all_bookings_with_screens(session)
    return [_to_detail(b, s) for b, s in rows]


@router.get("/{booking_id}", response_model=BookingDetail)
async def booking_confirmation(
    booking_id: int,
    session: AsyncSession = Depends(get_session),
) -> BookingDetail:
    row = await get_booking_with_screen(session, booking_id)
    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    return _to_detail(*row)


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_booking(
    booking_id: int,
    session: AsyncSession = Depends(get_session),
    current_admin: Admin = Depends(get_current_admin),
) -> None:
    ok = await delete_booking(session, booking_id)
    if not ok:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
