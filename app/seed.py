"""Seed default screens and the initial admin account (idempotent)."""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.db import async_session_maker, init_db
from app.models.screen import Screen, ScreenCreate
from app.services.auth_service import ensure_admin
from app.services.screen_service import create_screen, get_screen_by_name

logger = logging.getLogger(__name__)

SCREENS = [
    {
        "name": "Library Entrance Screen",
        "location": "Main Library, Ground Floor Entrance",
        "specs": '55" LED, 4K Resolution, High Brightness',
        "image_url": "https://placehold.co/600x400.png",
        "image_hint": "library entrance",
    },
    {
        "name": "Cafeteria Main Display",
        "location": "Student Cafeteria, West Wall",
        "specs": '70" LCD, Full HD, Wide Viewing Angle',
        "image_url": "https://placehold.co/600x400.png",
        "image_hint": "cafeteria display",
    },
    {
        "name": "Student Lounge Interactive",
        "location": "Student Lounge, Near Coffee Bar",
        "specs": '65" OLED, 4K Touchscreen, Interactive Kiosk',
        "image_url": "https://placehold.co/600x400.png",
        "image_hint": "lounge interactive",
    },
    {
        "name": "Tech Hub Screen Alpha",
        "location": "Tech Building, 1st Floor Hallway",
        "specs": '42" LCD, Portrait Mode, Info Display',
        "image_url": "https://placehold.co/400x600.png",
        "image_hint": "tech hub",
    },
]


async def seed_screens(session: AsyncSession) -> list[Screen]:
    screens: list[Screen] = []
    for data in SCREENS:
        screen = await get_screen_by_name(session, data["name"])
        if screen is None:
            screen = await create_screen(session, ScreenCreate(**data))
            logger.info("Created screen: %s", screen.name)
        screens.append(screen)
    return screens


async def seed(session: AsyncSession) -> None:
    await seed_screens(session)
    await ensure_admin(session, settings.initial_admin_username, settings.initial_admin_password)


async def main() -> None:
    await init_db()
    async with async_session_maker() as session:
        try:
            await seed(session)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
    logger.info("Seeding finished.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
