"""
Announcement endpoints - create, list, detail and status updates.
Thin controllers: parsing and status codes here, rules in AnnouncementService.
"""

from typing import Any

from fastapi import APIRouter, Request, status
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import UploadFile

from petfinder.core.dependencies import AnnouncementSvc, CurrentUser
from petfinder.core.exceptions import NotFoundError, ValidationError, format_validation_errors
from petfinder.schemas.announcement import (
    AnnouncementCreate,
    AnnouncementEnvelope,
    AnnouncementResponse,
    StatusUpdate,
)
from petfinder.services.images import Base64Payload, FileUpload, ImagePayload

router = APIRouter()

_FORM_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")
_REQUIRED_FIELDS = ("pet_name", "description", "type", "neighborhood")


async def _read_create_request(request: Request) -> tuple[AnnouncementCreate, ImagePayload]:
    """Accept multipart (file part "image") or JSON (base64 image_data + image_mime_type)."""
    content_type = request.headers.get("content-type", "")
    upload: FileUpload | None = None

    if content_type.startswith(_FORM_TYPES):
        form = await request.form()
        fields: Any = {key: value for key, value in form.items() if isinstance(value, str)}
        part = form.get("image")
        if isinstance(part, UploadFile):
            content = await part.read()
            # Browsers send an empty, unnamed part when no file was picked
            if content or part.filename:
                upload = FileUpload(data=content, mime_type=part.content_type)
    else:
        try:
            fields = await request.json()
        except ValueError:
            raise ValidationError("Request body must be JSON or multipart form data")
        if not isinstance(fields, dict):
            raise ValidationError("Request body must be a JSON object")

    try:
        data = AnnouncementCreate.model_validate(fields)
    except PydanticValidationError as exc:
        missing = any(error["loc"] and error["loc"][0] in _REQUIRED_FIELDS for error in exc.errors())
        raise ValidationError(
            "All required fields must be filled" if missing else "Invalid announcement data",
            details=format_validation_errors(exc.errors()),
        )

    image: ImagePayload = upload
    if image is None and data.image_data:
        image = Base64Payload(data=data.image_data, mime_type=data.image_mime_type)
    return data, image


@router.post(
    "/announcements",
    response_model=AnnouncementEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_announcement(request: Request, user: CurrentUser, announcements: AnnouncementSvc):
    """Create announcement owned by the caller. Image is optional."""
    data, image = await _read_create_request(request)
    announcement = await announcements.create(user.id, data, image)
    return AnnouncementEnvelope(message="Announcement created successfully", announcement=announcement)


@router.get("/announcements", response_model=list[AnnouncementResponse])
async def list_announcements(announcements: AnnouncementSvc, status: str = "active"):
    """Public listing for one status, newest first, owner contact attached."""
    return await announcements.list_all(status)


@router.get("/announcements/{announcement_id}", response_model=AnnouncementResponse)
async def get_announcement(announcement_id: int, announcements: AnnouncementSvc):
    announcement = await announcements.get(announcement_id)
    if not announcement:
        raise NotFoundError("Announcement not found")
    return announcement


@router.get("/my-announcements", response_model=list[AnnouncementResponse])
async def list_my_announcements(
    user: CurrentUser, announcements: AnnouncementSvc, status: str | None = None
):
    return await announcements.list_by_owner(user.id, status)


@router.patch("/announcements/{announcement_id}/status", response_model=AnnouncementEnvelope)
async def update_announcement_status(
    announcement_id: int,
    data: StatusUpdate,
    user: CurrentUser,
    announcements: AnnouncementSvc,
):
    """Owner-only. Missing and not-yours both answer 404 so ids of others' records don't leak."""
    announcement = await announcements.update_status(announcement_id, data.status, user.id)
    if not announcement:
        raise NotFoundError("Announcement not found or you are not allowed to edit it")
    return AnnouncementEnvelope(message="Status updated successfully", announcement=announcement)
