from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, ValidationError, field_validator

_http_url = TypeAdapter(HttpUrl)


def _clean_optional(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class _ScreenFields(BaseModel):
    @field_validator("image_url", check_fields=False)
    @classmethod
    def check_image_url(cls, v: str | None) -> str | None:
        v = _clean_optional(v)
        if v is not None:
            try:
                _http_url.validate_python(v)
            except ValidationError as e:
                raise ValueError("Image URL must be a valid URL") from e
        return v

    @field_validator("image_hint", check_fields=False)
    @classmethod
    def blank_hint(cls, v: str | None) -> str | None:
        return _clean_optional(v)


class ScreenUpsertRequest(_ScreenFields):
    name: str = Field(min_length=3, max_length=100)
    location: str = Field(min_length=3, max_length=150)
    specs: str = Field(min_length=3, max_length=255)
    image_url: str | None = Field(default=None, max_length=2048)
    image_hint: str | None = Field(default=None, max_length=50)


class ScreenPatchRequest(_ScreenFields):
    name: str | None = Field(default=None, min_length=3, max_length=100)
    location: str | None = Field(default=None, min_length=3, max_length=150)
    specs: str | None = Field(default=None, min_length=3, max_length=255)
    image_url: str | None = Field(default=None, max_length=2048)
    image_hint: str | None = Field(default=None, max_length=50)


class SlotAvailability(BaseModel):
    time_slot: str
    available: bool


class BookedSlotsResponse(BaseModel):
    screen_id: int
    date: str  # YYYY-MM-DD
    booked: list[str]
    slots: list[SlotAvailability]
