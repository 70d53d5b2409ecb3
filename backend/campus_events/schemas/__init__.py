from campus_events.schemas.base import ApiModel, MessageResponse
from campus_events.schemas.user import UserCreate, UserLogin, UserUpdate, UserResponse, UserProfile, Token
from campus_events.schemas.event import (
    EventCreate, EventUpdate, EventResponse, EventCreatedResponse, EventListResponse,
    CalendarEntry, RecommendedEvent, MembershipRequest,
)
from campus_events.schemas.checkin import (
    CheckinRequest, CheckinResponse, CheckinRecordResponse, CheckinTokenResponse,
)
from campus_events.schemas.engagement import (
    CommentCreate, CommentResponse, RatingCreate, RatingResponse, RatingSummary,
)
from campus_events.schemas.activity import ActivityEntryResponse

__all__ = [
    "ApiModel", "MessageResponse",
    "UserCreate", "UserLogin", "UserUpdate", "UserResponse", "UserProfile", "Token",
    "EventCreate", "EventUpdate", "EventResponse", "EventCreatedResponse", "EventListResponse",
    "CalendarEntry", "RecommendedEvent", "MembershipRequest",
    "CheckinRequest", "CheckinResponse", "CheckinRecordResponse", "CheckinTokenResponse",
    "CommentCreate", "CommentResponse", "RatingCreate", "RatingResponse", "RatingSummary",
    "ActivityEntryResponse",
]
