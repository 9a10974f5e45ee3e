from datetime import datetime
from enum import Enum

from pydantic import NaiveDatetime
from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel

from app.models.screen import utc_naive_now


class TimeSlot(str, Enum):
    """The fixed bookable periods of a day, in display order."""

    FOURTH_PERIOD = "4th period class"
    FIFTH_PERIOD = "5th period class"
    SEVENTH_PERIOD = "7th period class"


TIME_SLOTS: list[TimeSlot] = list(TimeSlot)


class Booking(SQLModel, table=True):
    __tablename__ = "bookings"
    # One booking per screen, day and slot
    __table_args__ = (
        UniqueConstraint("screen_id", "date", "time_slot", name="uq_bookings_screen_date_slot"),
    )
    id: int | None = Field(default=None, primary_key=True)
    screen_id: int = Field(foreign_key="screens.id", index=True)
    date: NaiveDatetime = Field(index=True, sa_type=DateTime)  # calendar day at the neutral booking hour
    time_slot: str
    user_name: str
    user_contact_number: str
    created_at: NaiveDatetime = Field(default_factory=utc_naive_now, sa_type=DateTime)


class BookingCreate(SQLModel):
    screen_id: int
    date: datetime
    time_slot: TimeSlot
    user_name: str
    user_contact_number: str

