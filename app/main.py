import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import auth, bookings, demand, screens, slots
from app.core.config import settings, _ENV_FILE
from app.core.db import async_session_maker, init_db
from app.core.errors import ScreenBookingError
from app.seed import seed

if os.getenv("ENV") != "production":
    logging.basicConfig(level=logging.DEBUG)
else:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}',
    )
logger = logging.getLogger(__name__)


async def _run_seed() -> None:
    """Insert default screens and the initial admin if they are missing."""
    try:
        async with async_session_maker() as session:
            try:
                await seed(session)
                await session.commit()
            except Exception:
                await session.rollback()
                raise
    except Exception as e:
        logger.exception("Seeding failed: %s", e)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Loading .env from: %s (exists: %s)", _ENV_FILE, _ENV_FILE.exists())
    logger.info("Suggestion backend: %s", "llm" if settings.llm_enabled else "rules")
    if settings.create_tables_on_startup:
        await init_db()
    if settings.seed_on_startup:
        await _run_seed()
    yield


app = FastAPI(
    title="Screen Booking API",
    description="Backend for booking slots on shared display screens: screens, demand, bookings, admin",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)

app.include_router(auth.router, prefix="/api/v1")
app.include_router(screens.router, prefix="/api/v1")
app.include_router(slots.router, prefix="/api/v1")
app.include_router(demand.router, prefix="/api/v1")
app.include_router(bookings.router, prefix="/api/v1")


def _cors_headers(origin: str | None) -> dict[str, str]:
    """Add CORS headers to error responses so the browser doesn't block them."""
    headers = {
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Allow-Methods": "GET, POST, PUT, PATCH, DELETE, OPTIONS",
        "Access-Control-Allow-Headers": "Authorization, Content-Type",
    }
    if origin and origin in settings.cors_origins_list:
        headers["Access-Control-Allow-Origin"] = origin
    elif settings.cors_origins_list:
        headers["Access-Control-Allow-Origin"] = settings.cors_origins_list[0]
    return headers


@app.exception_handler(ScreenBookingError)
async def booking_error_handler(request: Request, exc: ScreenBookingError) -> JSONResponse:
    """Typed service outcomes (conflict, not found, ...) become their HTTP status."""
    if exc.status_code >= 500:
        logger.warning("%s: %s", type(exc).__name__, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=_cors_headers(request.headers.get("origin")),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return actual error in JSON; include CORS so 500 responses are not blocked by browser."""
    origin = request.headers.get("origin")
    headers = _cors_headers(origin)
    if isinstance(exc, HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=headers,
        )
    logger.exception("Unhandled exception: %s", exc)
    detail = f"{type(exc).__name__}: {str(exc)}"
    return JSONResponse(
        status_code=500,
        content={"detail": detail},
        headers=headers,
    )


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}
