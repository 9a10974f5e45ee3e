from collections.abc import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from app.core.config import settings


def to_async_url(database_url: str) -> str:
    """Map a sync database URL onto its async driver.

    asyncpg does not accept psycopg params like sslmode/channel_binding, so they are
    stripped; SSL is enabled via connect_args instead.
    """
    url = make_url(database_url)
    if url.drivername == "postgresql":
        url = url.set(drivername="postgresql+asyncpg")
    elif url.drivername == "sqlite":
        url = url.set(drivername="sqlite+aiosqlite")
    url = url.difference_update_query(["sslmode", "channel_binding"])
    return url.render_as_string(hide_password=False)


async_database_url = to_async_url(settings.database_url)

if async_database_url.startswith("sqlite"):
    engine = create_async_engine(async_database_url, echo=False)
else:
    engine = create_async_engine(
        async_database_url,
        echo=settings.env == "development",
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        connect_args={"ssl": True},
    )

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create tables if using create_all; prefer Alembic in production."""
    # Register tables on the metadata before create_all
    import app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
