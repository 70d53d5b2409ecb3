"""
Pydantic schemas for user-related request/response validation.
"""

from datetime import datetime
from typing import Literal, Optional
from pydantic import EmailStr, Field

from campus_events.models.user import UserRole
from campus_events.schemas.base import ApiModel


class UserCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    # Admins are provisioned out of band
    role: Literal["student", "organizer"]


class UserLogin(ApiModel):
    email: EmailStr
    password: str
    role: Optional[UserRole] = None


class UserUpdate(ApiModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    preferences: Optional[list[str]] = None


class UserResponse(ApiModel):
    uid: str = Field(validation_alias="id")
    name: str
    email: str
    role: UserRole
    preferences: list[str]
    is_active: bool
    created_at: datetime


class UserProfile(UserResponse):
    registered_events: list[str]
    bookmarked_events: list[str]


class Token(ApiModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
