from datetime import UTC, datetime

from pydantic import NaiveDatetime
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utc_naive_now() -> datetime:
    """Naive UTC for TIMESTAMP WITHOUT TIME ZONE columns."""
    return datetime.now(UTC).replace(tzinfo=None)


class ScreenBase(SQLModel):
    name: str = Field(unique=True, index=True)
    location: str
    specs: str
    image_url: str | None = None
    image_hint: str | None = None  # short keyword(s) describing the image


class Screen(ScreenBase, table=True):
    __tablename__ = "screens"
    id: int | None = Field(default=None, primary_key=True)
    created_at: NaiveDatetime = Field(default_factory=utc_naive_now, sa_type=DateTime)
    updated_at: NaiveDatetime = Field(default_factory=utc_naive_now, sa_type=DateTime)


class ScreenPublic(ScreenBase):
    id: int
    created_at: datetime
    updated_at: datetime


class ScreenCreate(ScreenBase):
    pass


class ScreenUpdate(SQLModel):
    name: str | None = None
    location: str | None = None
    specs: str | None = None
    image_url: str | None = None
    image_hint: str | None = None
