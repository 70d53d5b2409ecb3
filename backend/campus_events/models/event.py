"""
Event model and its membership sets.

Key design decisions:
- `checkin_token` is generated once on insert and never exposed to updates
- Registrations and bookmarks are association rows keyed by
  (event_id, user_id); the composite primary key makes "add to set" an
  atomic insert-if-absent
- Index on `date` for calendar and listing queries
"""

import uuid

from sqlalchemy import Column, String, Text, Float, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from campus_events.db.base import Base, TimestampMixin, utcnow


def generate_checkin_token() -> str:
    return str(uuid.uuid4())


class Event(Base, TimestampMixin):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    club = Column(String(100), nullable=False, index=True)
    category = Column(String(100), nullable=False, index=True)
    date = Column(DateTime(timezone=True), nullable=False)
    time = Column(String(20), nullable=False)
    venue = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    poster_url = Column(String(1000), nullable=False, default="")
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    organizer_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    checkin_token = Column(String(64), nullable=False, default=generate_checkin_token)

    registrations = relationship(
        "EventRegistration",
        back_populates="event",
        lazy="selectin",
        order_by="EventRegistration.registered_at",
    )
    bookmarks = relationship(
        "EventBookmark",
        back_populates="event",
        lazy="selectin",
        order_by="EventBookmark.bookmarked_at",
    )

    __table_args__ = (
        Index("ix_events_date", "date"),
    )

    @property
    def registered_users(self) -> list[str]:
        return [r.user_id for r in self.registrations]

    @property
    def bookmarked_by(self) -> list[str]:
        return [b.user_id for b in self.bookmarks]

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title={self.title}, date={self.date})>"


class EventRegistration(Base):
    """Registration ledger row: user `user_id` is registered for `event_id`."""

    __tablename__ = "event_registrations"

    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    registered_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    event = relationship("Event", back_populates="registrations")


class EventBookmark(Base):
    __tablename__ = "event_bookmarks"

    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    bookmarked_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    event = relationship("Event", back_populates="bookmarks")
