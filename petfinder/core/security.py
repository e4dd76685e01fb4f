"""
Account credentials and bearer tokens.

Passwords are stored as bcrypt hashes. Tokens are HS256 JWTs whose ``sub`` is
the user id; they also carry ``id`` and ``email`` claims for clients, but the
auth gate only trusts ``sub`` and re-reads the user on every request.
"""

from datetime import datetime, timezone, timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from petfinder.config import get_settings

settings = get_settings()
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Salted one-way hash for storage."""
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time comparison through passlib. Unknown hash formats never match."""
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False


def create_access_token(subject: str | int, extra: dict[str, Any] | None = None) -> str:
    """Signed token expiring after jwt_expire_minutes (24h by default)."""
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_expire_minutes)
    to_encode = {"sub": str(subject), "exp": expire}
    if extra:
        to_encode.update(extra)
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Payload of a valid token; None for a bad signature, expiry or garbage."""
    try:
        return jwt.decode(
            token, settings.secret_key, algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        return None


def issue_user_token(user_id: int, email: str) -> str:
    """Token handed out on login/register; carries id and email."""
    return create_access_token(user_id, extra={"id": user_id, "email": email})
