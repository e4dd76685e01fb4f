"""
Comment repository - append and list, author eager-loaded.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from petfinder.db.models import Comment
from petfinder.db.repositories.base_repository import SqlRepository
from petfinder.db.repositories.interfaces import CommentRepository


class SqlCommentRepository(SqlRepository[Comment], CommentRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Comment)

    async def add(self, comment: Comment) -> Comment:
        comment = await super().add(comment)
        result = await self.session.execute(
            select(Comment)
            .where(Comment.id == comment.id)
            .options(selectinload(Comment.author))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def list_by_announcement(self, announcement_id: int) -> list[Comment]:
        result = await self.session.execute(
            select(Comment)
            .where(Comment.announcement_id == announcement_id)
            .options(selectinload(Comment.author))
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )
        return list(result.scalars().all())
