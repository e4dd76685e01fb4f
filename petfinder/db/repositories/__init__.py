# Repository pattern: services depend on interfaces, storage is swappable

from petfinder.db.repositories.announcement_repository import SqlAnnouncementRepository
from petfinder.db.repositories.comment_repository import SqlCommentRepository
from petfinder.db.repositories.interfaces import (
    AnnouncementRepository,
    CommentRepository,
    Repositories,
    UserRepository,
)
from petfinder.db.repositories.memory import InMemoryStore, get_memory_store
from petfinder.db.repositories.user_repository import SqlUserRepository

__all__ = [
    "AnnouncementRepository",
    "CommentRepository",
    "InMemoryStore",
    "Repositories",
    "SqlAnnouncementRepository",
    "SqlCommentRepository",
    "SqlUserRepository",
    "UserRepository",
    "get_memory_store",
]
