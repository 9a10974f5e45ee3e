from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_session
from app.api.schemas.booking import SlotSelection
from app.models.demand import DemandInfo, SlotAssessment
from app.services.demand_service import classify_demand
from app.services.recommendation_service import assess_slot

router = APIRouter(prefix="/demand", tags=["demand"])


@router.post("/check", response_model=DemandInfo)
async def check_demand(
    body: SlotSelection,
    session: AsyncSession = Depends(get_session),
) -> DemandInfo:
    return await classify_demand(session, body.screen_id, body.date, body.time_slot)


@router.post("/recommendations", response_model=SlotAssessment)
async def recommendations(
    body: SlotSelection,
    session: AsyncSession = Depends(get_session),
) -> SlotAssessment:
    """Demand for the selection plus alternatives when it is contended.

    recommendationsAvailable=false means the suggestion service could not answer;
    the client should let the user proceed with the original selection.
    """
    return await assess_slot(session, body.screen_id, body.date, body.time_slot)
