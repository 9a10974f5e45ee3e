import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_admin
from app.api.schemas.auth import LoginRequest, TokenResponse
from app.core.config import settings
from app.core.db import get_session
from app.models.admin import Admin, AdminPublic
from app.services.auth_service import admin_to_public, login_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    response: Response,
    session: AsyncSession = Depends(get_session),
) -> TokenResponse:
    result = await login_admin(session, body.username, body.password)
    if not result:
        logger.info("Admin login failed for %s", body.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password.",
        )
    admin, access, expires_in = result
    response.set_cookie(
        key=settings.admin_cookie_name,
        value=access,
        max_age=expires_in,
        httponly=True,
        secure=settings.env == "production",
        samesite="lax",
        path="/",
    )
    logger.info("Admin %s logged in", admin.username)
    return TokenResponse(access_token=access, expires_in=expires_in)


@router.post("/logout")
async def logout(response: Response) -> dict:
    response.delete_cookie(settings.admin_cookie_name, path="/")
    return {"message": "Logged out"}


@router.get("/me", response_model=AdminPublic)
async def me(current_admin: Admin = Depends(get_current_admin)) -> AdminPublic:
    return admin_to_public(current_admin)
