"""
Announcement service - creation, listings and the status state machine.

States are active (initial), found and inactive. Any state may move to any
state, including itself, but only the owner may move it. Entering "found"
stamps found_date; leaving "found" keeps the last stamp.
"""

import logging
from typing import Any

from petfinder.core.exceptions import ValidationError
from petfinder.core.metrics import ANNOUNCEMENTS_CREATED, STATUS_TRANSITIONS
from petfinder.db.base import utcnow
from petfinder.db.models import Announcement, AnnouncementStatus
from petfinder.db.repositories.interfaces import AnnouncementRepository
from petfinder.schemas.announcement import (
    AnnouncementCreate,
    AnnouncementResponse,
    OwnerProjection,
)
from petfinder.services.geocoding import NeighborhoodTable
from petfinder.services.images import ImagePayload, normalize_image, to_data_uri

logger = logging.getLogger(__name__)

ALLOWED_STATUSES = tuple(s.value for s in AnnouncementStatus)


def normalize_status(value: str | None) -> str:
    """Case-insensitive match against the allowed statuses; returns the stored form."""
    status = (value or "").strip().lower()
    if status not in ALLOWED_STATUSES:
        raise ValidationError(f"Invalid status. Use: {', '.join(ALLOWED_STATUSES)}")
    return status


def status_transition(status: str) -> dict[str, Any]:
    """Column changes for moving an announcement into ``status``."""
    now = utcnow()
    changes: dict[str, Any] = {"status": status, "updated_at": now}
    if status == AnnouncementStatus.FOUND.value:
        changes["found_date"] = now
    return changes


def _announcement_to_response(announcement: Announcement) -> AnnouncementResponse:
    owner = announcement.owner
    return AnnouncementResponse(
        id=announcement.id,
        pet_name=announcement.pet_name,
        description=announcement.description,
        type=announcement.type,
        user_id=announcement.user_id,
        image_data=to_data_uri(announcement.image_data, announcement.image_mime_type),
        image_mime_type=announcement.image_mime_type,
        neighborhood=announcement.neighborhood,
        latitude=announcement.latitude,
        longitude=announcement.longitude,
        status=announcement.status,
        found_date=announcement.found_date,
        created_at=announcement.created_at,
        updated_at=announcement.updated_at,
        user=OwnerProjection(name=owner.name, phone=owner.phone, email=owner.email)
        if owner is not None
        else None,
    )


class AnnouncementService:
    """Announcement use cases on top of a repository and the geocoding table."""

    def __init__(
        self,
        announcement_repo: AnnouncementRepository,
        neighborhoods: NeighborhoodTable,
        max_image_bytes: int,
    ):
        self.announcement_repo = announcement_repo
        self.neighborhoods = neighborhoods
        self.max_image_bytes = max_image_bytes

    async def create(
        self, owner_id: int, data: AnnouncementCreate, image: ImagePayload = None
    ) -> AnnouncementResponse:
        """Create an active announcement owned by ``owner_id``.

        Coordinates come from the caller when both are given, else from the
        neighborhood table; an unknown neighborhood leaves them empty.
        """
        stored_image = normalize_image(image, self.max_image_bytes)
        coords = self.neighborhoods.resolve_coordinates(
            data.neighborhood, data.latitude, data.longitude
        )
        announcement = Announcement(
            pet_name=data.pet_name,
            description=data.description,
            type=data.type,
            user_id=owner_id,
            image_data=stored_image.data if stored_image else None,
            image_mime_type=stored_image.mime_type if stored_image else None,
            neighborhood=data.neighborhood,
            latitude=coords.lat,
            longitude=coords.lng,
            status=AnnouncementStatus.ACTIVE.value,
        )
        announcement = await self.announcement_repo.add(announcement)
        ANNOUNCEMENTS_CREATED.labels(type=data.type, with_image=str(stored_image is not None).lower()).inc()
        logger.info(
            "Created announcement id=%s type=%s owner=%s image=%s",
            announcement.id,
            announcement.type,
            owner_id,
            f"{len(stored_image.data)} bytes" if stored_image else "none",
        )
        return _announcement_to_response(announcement)

    async def get(self, id: int) -> AnnouncementResponse | None:
        announcement = await self.announcement_repo.get_by_id_with_owner(id)
        return _announcement_to_response(announcement) if announcement else None

    async def list_all(self, status: str = AnnouncementStatus.ACTIVE.value) -> list[AnnouncementResponse]:
        """Public listing for one status bucket, newest first. No pagination."""
        rows = await self.announcement_repo.list_with_owner(status=status.strip().lower())
        return [_announcement_to_response(a) for a in rows]

    async def list_by_owner(self, owner_id: int, status: str | None = None) -> list[AnnouncementResponse]:
        rows = await self.announcement_repo.list_with_owner(
            owner_id=owner_id,
            status=status.strip().lower() if status else None,
        )
        return [_announcement_to_response(a) for a in rows]

    async def update_status(
        self, id: int, new_status: str, caller_id: int
    ) -> AnnouncementResponse | None:
        """Move to ``new_status``. None means missing or not owned by the caller."""
        status = normalize_status(new_status)
        announcement = await self.announcement_repo.update_status(
            id, caller_id, status_transition(status)
        )
        if announcement is None:
            STATUS_TRANSITIONS.labels(status=status, outcome="rejected").inc()
            logger.warning("Status update rejected: announcement=%s caller=%s", id, caller_id)
            return None
        STATUS_TRANSITIONS.labels(status=status, outcome="applied").inc()
        logger.info("Announcement id=%s is now %s", id, status)
        return _announcement_to_response(announcement)
