"""
FastAPI dependencies - storage selection, auth gate and service factories.
Everything request-scoped hangs off ``get_repositories`` so tests can swap
storage by overriding a single dependency.
"""

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from petfinder.config import get_settings
from petfinder.core.exceptions import ForbiddenError, UnauthorizedError
from petfinder.core.security import decode_access_token
from petfinder.db.models import User
from petfinder.db.repositories import (
    Repositories,
    SqlAnnouncementRepository,
    SqlCommentRepository,
    SqlUserRepository,
    get_memory_store,
)
from petfinder.db.session import session_scope
from petfinder.services.announcement_service import AnnouncementService
from petfinder.services.comment_service import CommentService
from petfinder.services.geocoding import get_neighborhood_table
from petfinder.services.user_service import UserService

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def sql_repositories(session: AsyncSession) -> Repositories:
    return Repositories(
        users=SqlUserRepository(session),
        announcements=SqlAnnouncementRepository(session),
        comments=SqlCommentRepository(session),
    )


async def get_repositories() -> AsyncGenerator[Repositories, None]:
    """Process-wide memory store, or SQL repositories on a request-scoped session.

    A session is only opened for the SQL backend.
    """
    if get_settings().storage_backend == "memory":
        yield get_memory_store().repositories()
        return
    async with session_scope() as session:
        yield sql_repositories(session)


Repos = Annotated[Repositories, Depends(get_repositories)]


async def get_current_user(
    repos: Repos,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> User:
    """Resolve the bearer token to a fresh user record.

    401 when no token is sent, 403 when the token is bad or expired or the
    user it names no longer exists.
    """
    if not credentials:
        raise UnauthorizedError()
    payload = decode_access_token(credentials.credentials)
    if not payload or "sub" not in payload:
        raise ForbiddenError("Invalid or expired token")
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise ForbiddenError("Invalid or expired token")
    user = await repos.users.get_by_id(user_id)
    if not user:
        logger.warning("Token for unknown user id=%s", user_id)
        raise ForbiddenError("User not found")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def get_user_service(repos: Repos) -> UserService:
    return UserService(repos.users)


def get_announcement_service(repos: Repos) -> AnnouncementService:
    return AnnouncementService(
        repos.announcements,
        get_neighborhood_table(),
        get_settings().max_image_bytes,
    )


def get_comment_service(repos: Repos) -> CommentService:
    return CommentService(repos.comments)


UserSvc = Annotated[UserService, Depends(get_user_service)]
AnnouncementSvc = Annotated[AnnouncementService, Depends(get_announcement_service)]
CommentSvc = Annotated[CommentService, Depends(get_comment_service)]
