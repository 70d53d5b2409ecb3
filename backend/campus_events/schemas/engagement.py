"""
Pydantic schemas for comments and ratings.
"""

from datetime import datetime
from pydantic import Field

from campus_events.schemas.base import ApiModel


class CommentCreate(ApiModel):
    user_id: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1, max_length=2000)


class CommentResponse(ApiModel):
    id: int
    event_id: str
    user_id: str
    text: str
    created_at: datetime


class RatingCreate(ApiModel):
    user_id: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    review: str = Field("", max_length=2000)


class RatingResponse(ApiModel):
    id: int
    event_id: str
    user_id: str
    rating: int
    review: str
    created_at: datetime


class RatingSummary(ApiModel):
    average: float
    count: int
    ratings: list[RatingResponse]
