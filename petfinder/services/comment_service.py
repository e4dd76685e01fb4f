"""Comment service - append-only threads under announcements."""

import logging

from sqlalchemy.exc import IntegrityError

from petfinder.core.exceptions import NotFoundError, ValidationError
from petfinder.core.metrics import COMMENTS_POSTED
from petfinder.db.models import Comment
from petfinder.db.repositories.interfaces import CommentRepository
from petfinder.schemas.comment import CommentAuthor, CommentResponse

logger = logging.getLogger(__name__)


def _comment_to_response(comment: Comment) -> CommentResponse:
    author = comment.author
    return CommentResponse(
        id=comment.id,
        announcement_id=comment.announcement_id,
        user_id=comment.user_id,
        content=comment.content,
        created_at=comment.created_at,
        user=CommentAuthor(name=author.name, email=author.email) if author else None,
    )


class CommentService:
    def __init__(self, comment_repo: CommentRepository):
        self.comment_repo = comment_repo

    async def create(self, announcement_id: int, author_id: int, content: str | None) -> CommentResponse:
        """Any authenticated user may comment, whatever the announcement status."""
        content = (content or "").strip()
        if not content:
            raise ValidationError("Comment content is required")
        try:
            comment = await self.comment_repo.add(
                Comment(announcement_id=announcement_id, user_id=author_id, content=content)
            )
        except IntegrityError as exc:
            # Parent existence is enforced by the foreign key
            raise NotFoundError("Announcement not found") from exc
        COMMENTS_POSTED.inc()
        logger.info("Comment id=%s on announcement id=%s", comment.id, announcement_id)
        return _comment_to_response(comment)

    async def list_by_announcement(self, announcement_id: int) -> list[CommentResponse]:
        rows = await self.comment_repo.list_by_announcement(announcement_id)
        return [_comment_to_response(c) for c in rows]
