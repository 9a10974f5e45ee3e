from app.models.admin import Admin, AdminPublic
from app.models.screen import Screen, ScreenCreate, ScreenPublic, ScreenUpdate
from app.models.booking import Booking, BookingCreate, TimeSlot, TIME_SLOTS
from app.models.demand import (
    DemandInfo,
    DemandLevel,
    RecommendationRequest,
    RecommendationResult,
    SlotAssessment,
)

__all__ = [
    "Admin",
    "AdminPublic",
    "Screen",
    "ScreenCreate",
    "ScreenPublic",
    "ScreenUpdate",
    "Booking",
    "BookingCreate",
    "TimeSlot",
    "TIME_SLOTS",
    "DemandInfo",
    "DemandLevel",
    "RecommendationRequest",
    "RecommendationResult",
    "SlotAssessment",
]
