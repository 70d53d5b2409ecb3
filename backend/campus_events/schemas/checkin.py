"""
Pydantic schemas for QR check-in.
"""

from datetime import datetime
from pydantic import Field

from campus_events.schemas.base import ApiModel


class CheckinRequest(ApiModel):
    user_id: str = Field(..., min_length=1)
    token: str = Field(..., min_length=1)


class CheckinResponse(ApiModel):
    message: str
    event_id: str
    user_id: str
    checked_in_at: datetime


class CheckinRecordResponse(ApiModel):
    user_id: str
    checked_in_at: datetime


class CheckinTokenResponse(ApiModel):
    event_id: str
    checkin_token: str
