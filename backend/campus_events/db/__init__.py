from campus_events.db.base import Base, TimestampMixin
from campus_events.db.session import get_db, get_engine, get_session_factory

__all__ = ["Base", "TimestampMixin", "get_db", "get_engine", "get_session_factory"]
