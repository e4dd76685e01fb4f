"""Announcement request/response schemas - REST API contract."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from petfinder.db.models import AnnouncementType
from petfinder.schemas.user import required_text


class AnnouncementCreate(BaseModel):
    """Body of POST /announcements, from JSON or from multipart form fields."""

    pet_name: str
    description: str
    type: str
    neighborhood: str
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    # JSON clients send the picture inline; multipart clients send a file part
    image_data: str | None = None
    image_mime_type: str | None = None

    @field_validator("pet_name", "description", "neighborhood")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return required_text(value)

    @field_validator("type")
    @classmethod
    def known_type(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in {t.value for t in AnnouncementType}:
            raise ValueError("type must be 'lost' or 'found'")
        return value

    @field_validator("latitude", "longitude", "image_data", "image_mime_type", mode="before")
    @classmethod
    def blank_as_missing(cls, value: Any) -> Any:
        # Form fields arrive as "" when left empty
        if isinstance(value, str) and not value.strip():
            return None
        return value


class StatusUpdate(BaseModel):
    status: str


class OwnerProjection(BaseModel):
    name: str
    phone: str
    email: str


class AnnouncementResponse(BaseModel):
    id: int
    pet_name: str
    description: str
    type: str
    user_id: int
    image_data: str | None = None  # data:<mime>;base64,<bytes>
    image_mime_type: str | None = None
    neighborhood: str
    latitude: float | None = None
    longitude: float | None = None
    status: str
    found_date: datetime | None = None
    created_at: datetime
    updated_at: datetime
    user: OwnerProjection | None = None


class AnnouncementEnvelope(BaseModel):
    message: str
    announcement: AnnouncementResponse
