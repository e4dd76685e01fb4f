"""
Announcement model - a lost or found pet report and its status.
"""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    LargeBinary,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from petfinder.db.base import Base, utcnow

if TYPE_CHECKING:
    from petfinder.db.models.user import User


class AnnouncementType(str, Enum):
    LOST = "lost"
    FOUND = "found"


class AnnouncementStatus(str, Enum):
    ACTIVE = "active"
    FOUND = "found"
    INACTIVE = "inactive"


class Announcement(Base):
    """Announcement entity. Owner and type never change after insert."""

    __tablename__ = "announcements"
    __table_args__ = (
        CheckConstraint("type IN ('lost', 'found')", name="ck_announcements_type"),
        CheckConstraint(
            "status IN ('active', 'found', 'inactive')", name="ck_announcements_status"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    pet_name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    image_data: Mapped[bytes | None] = mapped_column(LargeBinary, nullable=True)
    image_mime_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    neighborhood: Mapped[str] = mapped_column(String(255), nullable=False)
    latitude: Mapped[float | None] = mapped_column(Numeric(10, 8, asdecimal=False), nullable=True)
    longitude: Mapped[float | None] = mapped_column(Numeric(11, 8, asdecimal=False), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=AnnouncementStatus.ACTIVE.value, index=True
    )
    found_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )

    # Many-to-one only: loading a user must never pull every announcement image
    owner: Mapped["User"] = relationship("User")

    def __repr__(self) -> str:
        return f"<Announcement(id={self.id}, pet_name={self.pet_name}, status={self.status})>"
