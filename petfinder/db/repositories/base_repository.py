"""
Base SQL repository - session handling shared by the SQLAlchemy repositories.
"""

from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from petfinder.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class SqlRepository(Generic[ModelType]):
    """Generic async repository. Subclasses define model-specific queries."""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    async def get_by_id(self, id: int) -> ModelType | None:
        result = await self.session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def add(self, entity: ModelType) -> ModelType:
        """Persist new entity. Caller (request scope) commits the session."""
        self.session.add(entity)
        await self.session.flush()  # Get ID and surface constraint errors now
        await self.session.refresh(entity)
        return entity
