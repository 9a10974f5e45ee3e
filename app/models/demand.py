from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.booking import TimeSlot


class DemandLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class DemandInfo(BaseModel):
    level: DemandLevel
    message: str | None = None


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecommendationRequest(_CamelModel):
    selected_screen: int
    selected_date: str  # YYYY-MM-DD
    selected_time_period: TimeSlot
    demand_level: DemandLevel
    nearby_screens: list[int] = Field(default_factory=list)


class RecommendationResult(_CamelModel):
    alternative_time_slots: list[TimeSlot] = Field(default_factory=list)
    nearby_screen_recommendations: list[int] = Field(default_factory=list)
    reasoning: str = ""


class SlotAssessment(_CamelModel):
    demand: DemandInfo
    recommendations: RecommendationResult | None = None
    # False when demand called for recommendations but none could be produced
    recommendations_available: bool = True
