"""
Comment endpoints - read publicly, post when authenticated.
"""

from fastapi import APIRouter, status

from petfinder.core.dependencies import CommentSvc, CurrentUser
from petfinder.schemas.comment import CommentCreate, CommentEnvelope, CommentResponse

router = APIRouter()


@router.get("/announcements/{announcement_id}/comments", response_model=list[CommentResponse])
async def list_comments(announcement_id: int, comments: CommentSvc):
    """Oldest first. A non-numeric id is rejected with 400."""
    return await comments.list_by_announcement(announcement_id)


@router.post(
    "/announcements/{announcement_id}/comments",
    response_model=CommentEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    announcement_id: int, data: CommentCreate, user: CurrentUser, comments: CommentSvc
):
    comment = await comments.create(announcement_id, user.id, data.content)
    return CommentEnvelope(message="Comment created successfully", comment=comment)
