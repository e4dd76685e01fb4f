"""
Repository interfaces - what the services need from storage.

Two implementations exist: SQLAlchemy (production) and in-memory (demo
mode and unit tests). Services only ever see these abstractions.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from petfinder.db.models import Announcement, Comment, User


class UserRepository(ABC):
    @abstractmethod
    async def get_by_id(self, id: int) -> User | None: ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        """Exact (case-sensitive) match on the stored email."""

    @abstractmethod
    async def add(self, user: User) -> User:
        """Insert. Raises IntegrityError when the email is taken."""

    @abstractmethod
    async def update(self, user: User, changes: dict[str, Any]) -> User:
        """Apply column changes to an existing user."""


class AnnouncementRepository(ABC):
    @abstractmethod
    async def add(self, announcement: Announcement) -> Announcement:
        """Insert and return the stored row with ``owner`` loaded."""

    @abstractmethod
    async def get_by_id_with_owner(self, id: int) -> Announcement | None: ...

    @abstractmethod
    async def list_with_owner(
        self, *, status: str | None = None, owner_id: int | None = None
    ) -> list[Announcement]:
        """Filter by status and/or owner, newest first, ``owner`` loaded."""

    @abstractmethod
    async def update_status(
        self, id: int, owner_id: int, changes: dict[str, Any]
    ) -> Announcement | None:
        """Apply ``changes`` only if the row exists AND belongs to ``owner_id``.

        Returns None otherwise, without telling which condition failed.
        """


class CommentRepository(ABC):
    @abstractmethod
    async def add(self, comment: Comment) -> Comment:
        """Insert and return with ``author`` loaded.

        Raises IntegrityError when the parent announcement does not exist.
        """

    @abstractmethod
    async def list_by_announcement(self, announcement_id: int) -> list[Comment]:
        """Oldest first, ``author`` loaded."""


@dataclass
class Repositories:
    """Bundle handed to services by the dependency layer."""

    users: UserRepository
    announcements: AnnouncementRepository
    comments: CommentRepository
