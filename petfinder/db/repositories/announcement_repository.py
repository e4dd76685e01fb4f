"""
Announcement repository - queries and the conditional status update.
Owner is always eager-loaded (selectinload) so async code never lazy-loads.
"""

from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from petfinder.db.models import Announcement
from petfinder.db.repositories.base_repository import SqlRepository
from petfinder.db.repositories.interfaces import AnnouncementRepository


class SqlAnnouncementRepository(SqlRepository[Announcement], AnnouncementRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Announcement)

    async def add(self, announcement: Announcement) -> Announcement:
        announcement = await super().add(announcement)
        # Reload with owner to avoid a lazy load in async context (MissingGreenlet)
        return await self.get_by_id_with_owner(announcement.id)

    async def get_by_id_with_owner(self, id: int) -> Announcement | None:
        result = await self.session.execute(
            select(Announcement)
            .where(Announcement.id == id)
            .options(selectinload(Announcement.owner))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_with_owner(
        self, *, status: str | None = None, owner_id: int | None = None
    ) -> list[Announcement]:
        query = select(Announcement).options(selectinload(Announcement.owner))
        if status is not None:
            query = query.where(Announcement.status == status)
        if owner_id is not None:
            query = query.where(Announcement.user_id == owner_id)
        query = query.order_by(Announcement.created_at.desc(), Announcement.id.desc())
        result = await self.session.execute(query.execution_options(populate_existing=True))
        return list(result.scalars().all())

    async def update_status(
        self, id: int, owner_id: int, changes: dict[str, Any]
    ) -> Announcement | None:
        # Ownership check and mutation in one statement: no read-then-write race
        result = await self.session.execute(
            update(Announcement)
            .where(Announcement.id == id, Announcement.user_id == owner_id)
            .values(**changes)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None
        return await self.get_by_id_with_owner(id)
