"""
Registration ledger and bookmark endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.api.deps import get_activity_logger
from campus_events.db.session import get_db
from campus_events.schemas.base import MessageResponse
from campus_events.schemas.event import MembershipRequest
from campus_events.services.activity_service import ActivityLogger
from campus_events.services.registration_service import bookmark_event, register_for_event

router = APIRouter(prefix="/events", tags=["Registrations"])


@router.post("/{event_id}/register", response_model=MessageResponse)
async def register_endpoint(
    event_id: str,
    body: MembershipRequest,
    db: AsyncSession = Depends(get_db, scope="function"),
    activity: ActivityLogger = Depends(get_activity_logger),
):
    """Register a user for an event. A second registration is rejected."""
    await register_for_event(db, activity, event_id, body.user_id)
    return MessageResponse(message="Registered successfully")


@router.post("/{event_id}/bookmark", response_model=MessageResponse)
async def bookmark_endpoint(
    event_id: str,
    body: MembershipRequest,
    db: AsyncSession = Depends(get_db, scope="function"),
    activity: ActivityLogger = Depends(get_activity_logger),
):
    await bookmark_event(db, activity, event_id, body.user_id)
    return MessageResponse(message="Bookmarked")
