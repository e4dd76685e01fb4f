"""
User service - registration, login and profile updates.
Passwords are hashed here and never leave this layer in clear or hashed form.
"""

import logging

from sqlalchemy.exc import IntegrityError

from petfinder.core.exceptions import DuplicateEmailError
from petfinder.core.security import hash_password, verify_password
from petfinder.db.models import User
from petfinder.db.repositories.interfaces import UserRepository
from petfinder.schemas.user import ProfileUpdate, UserCreate

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def register(self, data: UserCreate) -> User:
        """Create user with a salted hash. Raises DuplicateEmailError if the email is taken."""
        if await self.user_repo.get_by_email(data.email):
            raise DuplicateEmailError()
        user = User(
            name=data.name,
            email=data.email,
            password=hash_password(data.password),
            phone=data.phone,
        )
        try:
            user = await self.user_repo.add(user)
        except IntegrityError as exc:
            # Lost a race with a concurrent registration
            raise DuplicateEmailError() from exc
        logger.info("Registered user id=%s", user.id)
        return user

    async def authenticate(self, email: str, password: str) -> User | None:
        user = await self.user_repo.get_by_email(email)
        if not user or not verify_password(password, user.password):
            return None
        return user

    async def update_profile(self, user: User, data: ProfileUpdate) -> User:
        """Partial update. Email uniqueness is re-checked against other users only."""
        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None
        }
        if "email" in changes and changes["email"] != user.email:
            existing = await self.user_repo.get_by_email(changes["email"])
            if existing and existing.id != user.id:
                raise DuplicateEmailError()
        if "password" in changes:
            changes["password"] = hash_password(changes["password"])
        if not changes:
            return user
        try:
            user = await self.user_repo.update(user, changes)
        except IntegrityError as exc:
            raise DuplicateEmailError() from exc
        logger.info("Updated profile user id=%s fields=%s", user.id, sorted(changes))
        return user
