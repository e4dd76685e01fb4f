"""
In-memory repositories - demo backend and unit-test double.

Data lives for the lifetime of the process only. The unique-email and
comment -> announcement foreign-key constraints are emulated by raising
SQLAlchemy's IntegrityError, so services handle both backends the same way.
"""

import logging
from itertools import count
from typing import Any

from sqlalchemy.exc import IntegrityError

from petfinder.db.base import utcnow
from petfinder.db.models import Announcement, Comment, User
from petfinder.db.repositories.interfaces import (
    AnnouncementRepository,
    CommentRepository,
    Repositories,
    UserRepository,
)

logger = logging.getLogger(__name__)


def _constraint_error(statement: str, message: str) -> IntegrityError:
    return IntegrityError(statement, None, Exception(message))


class InMemoryStore:
    """Tables as dicts keyed by id, plus one id sequence per table."""

    def __init__(self):
        self.users: dict[int, User] = {}
        self.announcements: dict[int, Announcement] = {}
        self.comments: dict[int, Comment] = {}
        self._user_ids = count(1)
        self._announcement_ids = count(1)
        self._comment_ids = count(1)

    def repositories(self) -> Repositories:
        return Repositories(
            users=InMemoryUserRepository(self),
            announcements=InMemoryAnnouncementRepository(self),
            comments=InMemoryCommentRepository(self),
        )


class InMemoryUserRepository(UserRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_id(self, id: int) -> User | None:
        return self.store.users.get(id)

    async def get_by_email(self, email: str) -> User | None:
        for user in self.store.users.values():
            if user.email == email:
                return user
        return None

    async def add(self, user: User) -> User:
        if await self.get_by_email(user.email) is not None:
            raise _constraint_error("INSERT INTO users", "UNIQUE constraint failed: users.email")
        user.id = next(self.store._user_ids)
        user.created_at = user.created_at or utcnow()
        self.store.users[user.id] = user
        return user

    async def update(self, user: User, changes: dict[str, Any]) -> User:
        email = changes.get("email")
        if email is not None:
            other = await self.get_by_email(email)
            if other is not None and other.id != user.id:
                raise _constraint_error("UPDATE users", "UNIQUE constraint failed: users.email")
        for field, value in changes.items():
            setattr(user, field, value)
        return user


class InMemoryAnnouncementRepository(AnnouncementRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    def _with_owner(self, announcement: Announcement) -> Announcement:
        # Owner projection is resolved at read time, never copied at write time
        announcement.owner = self.store.users.get(announcement.user_id)
        return announcement

    async def add(self, announcement: Announcement) -> Announcement:
        if announcement.user_id not in self.store.users:
            raise _constraint_error(
                "INSERT INTO announcements", "FOREIGN KEY constraint failed"
            )
        now = utcnow()
        announcement.id = next(self.store._announcement_ids)
        announcement.status = announcement.status or "active"
        announcement.created_at = now
        announcement.updated_at = now
        self.store.announcements[announcement.id] = announcement
        return self._with_owner(announcement)

    async def get_by_id_with_owner(self, id: int) -> Announcement | None:
        announcement = self.store.announcements.get(id)
        return self._with_owner(announcement) if announcement else None

    async def list_with_owner(
        self, *, status: str | None = None, owner_id: int | None = None
    ) -> list[Announcement]:
        rows = [
            a
            for a in self.store.announcements.values()
            if (status is None or a.status == status)
            and (owner_id is None or a.user_id == owner_id)
        ]
        rows.sort(key=lambda a: (a.created_at, a.id), reverse=True)
        return [self._with_owner(a) for a in rows]

    async def update_status(
        self, id: int, owner_id: int, changes: dict[str, Any]
    ) -> Announcement | None:
        announcement = self.store.announcements.get(id)
        if announcement is None or announcement.user_id != owner_id:
            return None
        for field, value in changes.items():
            setattr(announcement, field, value)
        return self._with_owner(announcement)


class InMemoryCommentRepository(CommentRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    def _with_author(self, comment: Comment) -> Comment:
        comment.author = self.store.users.get(comment.user_id)
        return comment

    async def add(self, comment: Comment) -> Comment:
        if comment.announcement_id not in self.store.announcements:
            raise _constraint_error("INSERT INTO comments", "FOREIGN KEY constraint failed")
        comment.id = next(self.store._comment_ids)
        comment.created_at = utcnow()
        self.store.comments[comment.id] = comment
        return self._with_author(comment)

    async def list_by_announcement(self, announcement_id: int) -> list[Comment]:
        rows = [c for c in self.store.comments.values() if c.announcement_id == announcement_id]
        rows.sort(key=lambda c: (c.created_at, c.id))
        return [self._with_author(c) for c in rows]


_default_store: InMemoryStore | None = None


def get_memory_store() -> InMemoryStore:
    """Process-wide store used when storage_backend is "memory"."""
    global _default_store
    if _default_store is None:
        logger.warning("Using in-memory storage: data is lost when the process exits")
        _default_store = InMemoryStore()
    return _default_store
