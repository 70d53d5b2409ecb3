"""
Check-in record: proof that a registered user scanned an event's QR code.

The composite primary key (event_id, user_id) is the idempotency guard:
at most one record can exist per attendee per event, whatever the number
of concurrent scans.
"""

from sqlalchemy import Column, String, DateTime, ForeignKey

from campus_events.db.base import Base, utcnow


class CheckinRecord(Base):
    __tablename__ = "checkins"

    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    checked_in_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<CheckinRecord(event={self.event_id}, user={self.user_id})>"
