"""
Pydantic schemas for event-related request/response validation.
"""

from datetime import datetime
from typing import Optional
from pydantic import Field

from campus_events.schemas.base import ApiModel


class EventCreate(ApiModel):
    title: str = Field(..., min_length=1, max_length=255)
    club: str = Field(..., min_length=1, max_length=100)
    category: str = Field(..., min_length=1, max_length=100)
    date: datetime
    time: str = Field(..., min_length=1, max_length=20)
    venue: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    poster_url: Optional[str] = Field(None, max_length=1000)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class EventUpdate(ApiModel):
    """Descriptive fields only; token, organizer and membership are immutable here."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    club: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    date: Optional[datetime] = None
    time: Optional[str] = Field(None, min_length=1, max_length=20)
    venue: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    poster_url: Optional[str] = Field(None, max_length=1000)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class EventResponse(ApiModel):
    id: str
    title: str
    club: str
    category: str
    date: datetime
    time: str
    venue: str
    description: str
    poster_url: str
    latitude: Optional[float]
    longitude: Optional[float]
    organizer_id: str
    registered_users: list[str]
    bookmarked_by: list[str]
    created_at: datetime


class EventCreatedResponse(EventResponse):
    checkin_token: str


class EventListResponse(ApiModel):
    events: list[EventResponse]
    total: int
    page: int
    page_size: int


class CalendarEntry(ApiModel):
    id: str
    title: str
    date: datetime


class RecommendedEvent(EventResponse):
    score: int


class MembershipRequest(ApiModel):
    user_id: str = Field(..., min_length=1)
