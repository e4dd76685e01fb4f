from petfinder.db.models.announcement import (
    Announcement,
    AnnouncementStatus,
    AnnouncementType,
)
from petfinder.db.models.comment import Comment
from petfinder.db.models.user import User

__all__ = ["User", "Announcement", "AnnouncementStatus", "AnnouncementType", "Comment"]
