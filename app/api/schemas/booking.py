from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.booking import TimeSlot
from app.models.screen import ScreenPublic


class SlotSelection(BaseModel):
    screen_id: int
    date: date
    time_slot: TimeSlot


class BookingRequest(SlotSelection):
    # strip before the length checks so padding cannot satisfy them
    model_config = ConfigDict(str_strip_whitespace=True)

    user_name: str = Field(min_length=2, max_length=100)
    user_contact_number: str = Field(min_length=7, max_length=20)


class BookingCreatedResponse(BaseModel):
    booking_id: int


class BookingDetail(BaseModel):
    id: int
    screen_id: int
    date: datetime
    time_slot: str
    user_name: str
    user_contact_number: str
    created_at: datetime
    screen: ScreenPublic
