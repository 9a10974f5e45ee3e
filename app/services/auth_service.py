import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.security import create_access_token, hash_password, verify_password
from app.models.admin import Admin, AdminPublic

logger = logging.getLogger(__name__)


async def get_admin_by_username(session: AsyncSession, username: str) -> Admin | None:
    result = await session.execute(select(Admin).where(Admin.username == username))
    return result.scalar_one_or_none()


async def get_admin_by_id(session: AsyncSession, admin_id: int) -> Admin | None:
    result = await session.execute(select(Admin).where(Admin.id == admin_id))
    return result.scalar_one_or_none()


async def create_admin(session: AsyncSession, username: str, password: str) -> Admin:
    admin = Admin(username=username, hashed_password=hash_password(password))
    session.add(admin)
    await session.flush()
    await session.refresh(admin)
    return admin


def admin_to_public(admin: Admin) -> AdminPublic:
    return AdminPublic(id=admin.id, username=admin.username)


def make_access_token(admin_id: int) -> tuple[str, int]:
    access = create_access_token(admin_id)
    expires_in = settings.access_token_expire_minutes * 60
    return access, expires_in


async def login_admin(
    session: AsyncSession, username: str, password: str
) -> tuple[Admin, str, int] | None:
    admin = await get_admin_by_username(session, username)
    if not admin or not verify_password(password, admin.hashed_password):
        return None
    access, expires_in = make_access_token(admin.id)
    return admin, access, expires_in


async def ensure_admin(session: AsyncSession, username: str, password: str) -> Admin | None:
    """Create the initial admin account if it does not exist yet."""
    if not username or not password:
        logger.warning("Initial admin not created: INITIAL_ADMIN_USERNAME/INITIAL_ADMIN_PASSWORD not set")
        return None
    existing = await get_admin_by_username(session, username)
    if existing:
        return existing
    admin = await create_admin(session, username, password)
    logger.info("Created admin user: %s", username)
    return admin
