from campus_events.models.user import User, UserRole
from campus_events.models.event import Event, EventRegistration, EventBookmark
from campus_events.models.checkin import CheckinRecord
from campus_events.models.engagement import Comment, Rating
from campus_events.models.activity import ActivityEntry, ActivityType

__all__ = [
    "User", "UserRole",
    "Event", "EventRegistration", "EventBookmark",
    "CheckinRecord",
    "Comment", "Rating",
    "ActivityEntry", "ActivityType",
]
