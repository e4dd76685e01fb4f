"""
Declarative base shared by the users, announcements and comments tables.
Alembic reads ``Base.metadata`` from here.
"""

from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    """Timestamps are produced in Python so every backend gets microseconds."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass
