from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError, NotFoundError
from app.models.booking import Booking
from app.models.screen import Screen, ScreenCreate, ScreenUpdate, utc_naive_now


async def list_screens(session: AsyncSession) -> list[Screen]:
    result = await session.execute(select(Screen).order_by(Screen.name))
    return list(result.scalars().all())


async def list_screen_ids(session: AsyncSession) -> list[int]:
    result = await session.execute(select(Screen.id).order_by(Screen.id))
    return [row[0] for row in result.all()]


async def get_screen(session: AsyncSession, screen_id: int) -> Screen | None:
    result = await session.execute(select(Screen).where(Screen.id == screen_id))
    return result.scalar_one_or_none()


async def get_screen_by_name(session: AsyncSession, name: str) -> Screen | None:
    result = await session.execute(select(Screen).where(Screen.name == name))
    return result.scalar_one_or_none()


async def create_screen(session: AsyncSession, data: ScreenCreate) -> Screen:
    if await get_screen_by_name(session, data.name):
        raise ConflictError(f"A screen named '{data.name}' already exists.")
    screen = Screen(**data.model_dump())
    session.add(screen)
    await session.flush()
    await session.refresh(screen)
    return screen


async def update_screen(session: AsyncSession, screen_id: int, data: ScreenUpdate) -> Screen:
    screen = await get_screen(session, screen_id)
    if not screen:
        raise NotFoundError("Screen not found.")
    changes = data.model_dump(exclude_unset=True)
    # name, location and specs are required columns; null means "leave as is"
    for key in ("name", "location", "specs"):
        if changes.get(key, "") is None:
            changes.pop(key)
    new_name = changes.get("name")
    if new_name and new_name != screen.name:
        other = await get_screen_by_name(session, new_name)
        if other and other.id != screen.id:
            raise ConflictError(f"A screen named '{new_name}' already exists.")
    for key, value in changes.items():
        setattr(screen, key, value)
    screen.updated_at = utc_naive_now()
    session.add(screen)
    await session.flush()
    await session.refresh(screen)
    return screen


async def delete_screen(session: AsyncSession, screen_id: int) -> None:
    """Delete a screen; refused while any booking still references it."""
    screen = await get_screen(session, screen_id)
    if not screen:
        raise NotFoundError("Screen not found.")
    result = await session.execute(
        select(func.count(Booking.id)).where(Booking.screen_id == screen_id)
    )
    if result.scalar_one() > 0:
        raise ConflictError(
            "Cannot delete screen with existing bookings. Please delete bookings first."
        )
    await session.delete(screen)
    await session.flush()
