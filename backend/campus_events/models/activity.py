"""
Append-only activity feed entries.
"""

import enum

from sqlalchemy import Column, Integer, String, JSON, DateTime, Index

from campus_events.db.base import Base, utcnow


class ActivityType(str, enum.Enum):
    USER_REGISTERED = "USER_REGISTERED"
    PROFILE_UPDATED = "PROFILE_UPDATED"
    EVENT_CREATED = "EVENT_CREATED"
    EVENT_UPDATED = "EVENT_UPDATED"
    EVENT_DELETED = "EVENT_DELETED"
    USER_REGISTERED_EVENT = "USER_REGISTERED_EVENT"
    EVENT_BOOKMARKED = "EVENT_BOOKMARKED"
    USER_CHECKED_IN = "USER_CHECKED_IN"
    COMMENT_ADDED = "COMMENT_ADDED"
    RATING_ADDED = "RATING_ADDED"


class ActivityEntry(Base):
    __tablename__ = "activity_feed"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(40), nullable=False)
    payload = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index("ix_activity_feed_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<ActivityEntry(id={self.id}, type={self.type})>"
