"""Comment request/response schemas."""

from datetime import datetime

from pydantic import BaseModel


class CommentCreate(BaseModel):
    # Trimmed and checked for emptiness by the service
    content: str


class CommentAuthor(BaseModel):
    """Less contact surface than announcements: no phone."""

    name: str
    email: str


class CommentResponse(BaseModel):
    id: int
    announcement_id: int
    user_id: int
    content: str
    created_at: datetime
    user: CommentAuthor | None = None


class CommentEnvelope(BaseModel):
    message: str
    comment: CommentResponse
