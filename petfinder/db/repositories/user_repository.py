"""
User repository - all user queries in one place.
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from petfinder.db.models import User
from petfinder.db.repositories.base_repository import SqlRepository
from petfinder.db.repositories.interfaces import UserRepository


class SqlUserRepository(SqlRepository[User], UserRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> User | None:
        """Find user by email - used for login and uniqueness checks."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def update(self, user: User, changes: dict[str, Any]) -> User:
        for field, value in changes.items():
            setattr(user, field, value)
        await self.session.flush()
        await self.session.refresh(user)
        return user
