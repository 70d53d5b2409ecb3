"""
User model with secure password storage.

The primary key doubles as the token subject (uid).
"""

import enum
import uuid

from sqlalchemy import Column, String, Boolean, JSON, CheckConstraint
from sqlalchemy.orm import relationship

from campus_events.db.base import Base, TimestampMixin


class UserRole(str, enum.Enum):
    STUDENT = "student"
    ORGANIZER = "organizer"
    ADMIN = "admin"


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=UserRole.STUDENT.value)
    preferences = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, default=True, nullable=False)

    registrations = relationship("EventRegistration", lazy="selectin", viewonly=True)
    bookmarks = relationship("EventBookmark", lazy="selectin", viewonly=True)

    __table_args__ = (
        CheckConstraint("role IN ('student', 'organizer', 'admin')", name="check_user_role"),
    )

    @property
    def registered_events(self) -> list[str]:
        return [r.event_id for r in self.registrations]

    @property
    def bookmarked_events(self) -> list[str]:
        return [b.event_id for b in self.bookmarks]

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
