"""Alternative slot/screen suggestions for contended bookings.

Suggestions come from a pluggable generator: a deterministic rule engine by default,
or an Anthropic-backed generator when SUGGESTION_BACKEND=llm and an API key is set.
Returned slot labels and screen ids are not checked against the live database here.
"""

import asyncio
import json
import logging
from datetime import date, datetime
from typing import Protocol

import anthropic
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.errors import DependencyUnavailable, ValidationError
from app.models.booking import TIME_SLOTS, TimeSlot
from app.models.demand import (
    DemandLevel,
    RecommendationRequest,
    RecommendationResult,
    SlotAssessment,
)
from app.services.demand_service import classify_demand
from app.services.screen_service import list_screen_ids
from app.services.slot_service import get_booked_slots, get_booked_slots_by_screen

logger = logging.getLogger(__name__)

MAX_ALTERNATIVE_SLOTS = 2


class SuggestionGenerator(Protocol):
    async def generate(self, request: RecommendationRequest) -> RecommendationResult: ...


class RuleBasedSuggestionGenerator:
    """Offer the nearest free slots on the same screen and the quietest other screens."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def generate(self, request: RecommendationRequest) -> RecommendationResult:
        day = date.fromisoformat(request.selected_date)
        requested = request.selected_time_period
        booked = set(await get_booked_slots(self.session, request.selected_screen, day))
        pos = TIME_SLOTS.index(requested)
        free = [s for s in TIME_SLOTS if s != requested and s not in booked]
        free.sort(key=lambda s: (abs(TIME_SLOTS.index(s) - pos), TIME_SLOTS.index(s)))
        slots = free[:MAX_ALTERNATIVE_SLOTS]

        by_screen = await get_booked_slots_by_screen(self.session, request.nearby_screens, day)
        idle = [sid for sid in request.nearby_screens if not by_screen.get(sid)]
        if idle:
            screens = idle
        else:
            screens = [
                sid for sid in request.nearby_screens
                if requested.value not in by_screen.get(sid, set())
            ]

        return RecommendationResult(
            alternative_time_slots=slots,
            nearby_screen_recommendations=screens,
            reasoning=_rule_reasoning(request, slots, screens, bool(idle)),
        )


def _rule_reasoning(
    request: RecommendationRequest,
    slots: list[TimeSlot],
    screens: list[int],
    idle: bool,
) -> str:
    parts = [
        f"Demand for {request.selected_time_period.value} on screen {request.selected_screen} "
        f"on {request.selected_date} is {request.demand_level.value}."
    ]
    if slots:
        parts.append(
            "The closest free periods on the same screen are "
            + ", ".join(s.value for s in slots)
            + "."
        )
    else:
        parts.append("No other period is free on the same screen that day.")
    if screens and idle:
        parts.append("These screens have no bookings that day: " + ", ".join(str(s) for s in screens) + ".")
    elif screens:
        parts.append(
            f"These screens still have {request.selected_time_period.value} free: "
            + ", ".join(str(s) for s in screens)
            + "."
        )
    else:
        parts.append("No other screen has the requested period free.")
    return " ".join(parts)


SYSTEM_PROMPT = (
    "You are an assistant that recommends alternative time slots or nearby screens when the "
    "demand for the selected screen and time is high, to maximize coverage and reduce redundancy. "
    "Answer with a single JSON object and nothing else."
)


def build_prompt(request: RecommendationRequest) -> str:
    nearby = ", ".join(str(s) for s in request.nearby_screens) or "none"
    slots = ", ".join(s.value for s in TIME_SLOTS)
    return (
        f"The user has selected Screen: {request.selected_screen}, Date: {request.selected_date}, "
        f"Time Period: {request.selected_time_period.value}.\n"
        f"Current demand level is: {request.demand_level.value}.\n"
        f"Nearby screens are: {nearby}.\n"
        f"Valid time periods are: {slots}.\n\n"
        "Based on this information, recommend alternative time periods and/or nearby screens to "
        "maximize coverage and reduce potential redundancy. Respond in this JSON format:\n"
        "{\n"
        '  "alternativeTimeSlots": ["List of alternative time periods"],\n'
        '  "nearbyScreenRecommendations": [list of nearby screen ids],\n'
        '  "reasoning": "Explanation of why these recommendations are being made."\n'
        "}"
    )


def parse_llm_output(raw: str) -> RecommendationResult:
    """Parse the model's JSON answer; unknown period labels are dropped."""
    text = raw.strip()
    # Clean markdown fencing if present
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    parsed = json.loads(text)
    known = {s.value for s in TIME_SLOTS}
    parsed["alternativeTimeSlots"] = [
        s for s in parsed.get("alternativeTimeSlots") or [] if s in known
    ]
    return RecommendationResult.model_validate(parsed)


class LLMSuggestionGenerator:
    def __init__(self, client: anthropic.AsyncAnthropic | None = None, model: str | None = None):
        self._client = client or anthropic.AsyncAnthropic(api_key=settings.anthropic_api_key)
        self.model = model or settings.anthropic_model

    async def generate(self, request: RecommendationRequest) -> RecommendationResult:
        response = await self._client.messages.create(
            model=self.model,
            max_tokens=settings.anthropic_max_tokens,
            temperature=0,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": build_prompt(request)}],
        )
        return parse_llm_output(response.content[0].text)


def build_suggestion_generator(session: AsyncSession) -> SuggestionGenerator:
    if settings.suggestion_backend == "llm":
        if settings.llm_enabled:
            return LLMSuggestionGenerator()
        logger.warning("SUGGESTION_BACKEND=llm but ANTHROPIC_API_KEY is not set; using rules")
    return RuleBasedSuggestionGenerator(session)


async def request_recommendations(
    generator: SuggestionGenerator,
    selected_screen_id: int,
    selected_date: date | datetime,
    selected_time_slot: TimeSlot,
    demand_level: DemandLevel,
    candidate_screen_ids: list[int],
    timeout: float | None = None,
) -> RecommendationResult:
    """Ask the generator for alternatives to a medium/high demand selection.

    Raises DependencyUnavailable when the generator fails or exceeds the timeout;
    callers treat that as "proceed with the original selection".
    """
    if demand_level == DemandLevel.LOW:
        raise ValidationError("Recommendations are only requested for medium or high demand.")
    day = selected_date.date() if isinstance(selected_date, datetime) else selected_date
    request = RecommendationRequest(
        selected_screen=selected_screen_id,
        selected_date=day.isoformat(),
        selected_time_period=selected_time_slot,
        demand_level=demand_level,
        nearby_screens=[sid for sid in candidate_screen_ids if sid != selected_screen_id],
    )
    if timeout is None:
        timeout = settings.recommendation_timeout_seconds
    try:
        return await asyncio.wait_for(generator.generate(request), timeout=timeout)
    except TimeoutError as e:
        logger.warning("Recommendation request timed out after %.1fs", timeout)
        raise DependencyUnavailable("Recommendation service timed out.") from e
    except Exception as e:
        logger.exception("Recommendation request failed: %s", e)
        raise DependencyUnavailable("Recommendation service unavailable.") from e


async def assess_slot(
    session: AsyncSession,
    screen_id: int,
    day: date | datetime,
    time_slot: TimeSlot,
    generator: SuggestionGenerator | None = None,
) -> SlotAssessment:
    """Classify demand and, for medium/high demand, fetch alternatives.

    Recommendation failures never block the booking: the assessment comes back
    with recommendations=None and recommendations_available=False.
    """
    demand = await classify_demand(session, screen_id, day, time_slot)
    if demand.level == DemandLevel.LOW:
        return SlotAssessment(demand=demand)
    try:
        # Every other known screen stands in for "nearby"
        candidates = await list_screen_ids(session)
        result = await request_recommendations(
            generator or build_suggestion_generator(session),
            screen_id,
            day,
            time_slot,
            demand.level,
            candidates,
        )
    except DependencyUnavailable as e:
        logger.warning("Proceeding without recommendations: %s", e.message)
        return SlotAssessment(demand=demand, recommendations_available=False)
    except Exception as e:
        logger.exception("Could not list candidate screens: %s", e)
        return SlotAssessment(demand=demand, recommendations_available=False)
    return SlotAssessment(demand=demand, recommendations=result)
