import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_admin, get_session
from app.api.schemas.screen import ScreenPatchRequest, ScreenUpsertRequest
from app.models.admin import Admin
from app.models.screen import Screen, ScreenCreate, ScreenPublic, ScreenUpdate
from app.services.screen_service import (
    create_screen,
    delete_screen,
    get_screen,
    list_screens,
    update_screen,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/screens", tags=["screens"])


def _to_public(s: Screen) -> ScreenPublic:
    return ScreenPublic.model_validate(s, from_attributes=True)


@router.get("", response_model=list[ScreenPublic])
async def all_screens(session: AsyncSession = Depends(get_session)) -> list[ScreenPublic]:
    return [_to_public(s) for s in await list_screens(session)]


@router.get("/{screen_id}", response_model=ScreenPublic)
async def screen_detail(screen_id: int, session: AsyncSession = Depends(get_session)) -> ScreenPublic:
    screen = await get_screen(session, screen_id)
    if not screen:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Screen not found")
    return _to_public(screen)


@router.post("", response_model=ScreenPublic, status_code=status.HTTP_201_CREATED)
async def add_screen(
    body: ScreenUpsertRequest,
    session: AsyncSession = Depends(get_session),
    current_admin: Admin = Depends(get_current_admin),
) -> ScreenPublic:
    screen = await create_screen(session, ScreenCreate(**body.model_dump()))
    logger.info("Admin %s created screen %s (%s)", current_admin.username, screen.id, screen.name)
    return _to_public(screen)


@router.put("/{screen_id}", response_model=ScreenPublic)
async def edit_screen(
    screen_id: int,
    body: ScreenPatchRequest,
    session: AsyncSession = Depends(get_session),
    current_admin: Admin = Depends(get_current_admin),
) -> ScreenPublic:
    screen = await update_screen(session, screen_id, ScreenUpdate(**body.model_dump(exclude_unset=True)))
    logger.info("Admin %s updated screen %s", current_admin.username, screen.id)
    return _to_public(screen)


@router.delete("/{screen_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_screen(
    screen_id: int,
    session: AsyncSession = Depends(get_session),
    current_admin: Admin = Depends(get_current_admin),
) -> None:
    await delete_screen(session, screen_id)
    logger.info("Admin %s deleted screen %s", current_admin.username, screen_id)
