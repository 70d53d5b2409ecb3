"""
QR check-in endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.api.deps import get_activity_logger, require_organizer
from campus_events.db.session import get_db
from campus_events.models.user import User
from campus_events.schemas.checkin import (
    CheckinRecordResponse,
    CheckinRequest,
    CheckinResponse,
    CheckinTokenResponse,
)
from campus_events.services.activity_service import ActivityLogger
from campus_events.services.checkin_service import check_in, list_checkins
from campus_events.services.event_service import ensure_can_manage, get_event

router = APIRouter(prefix="/events", tags=["Check-in"])


@router.post("/{event_id}/checkin", response_model=CheckinResponse)
async def checkin_endpoint(
    event_id: str,
    body: CheckinRequest,
    db: AsyncSession = Depends(get_db, scope="function"),
    activity: ActivityLogger = Depends(get_activity_logger),
):
    """
    Check a registered attendee in with the token from the event's QR code.

    404 unknown event, 403 wrong token or not registered,
    400 missing fields or already checked in.
    """
    record = await check_in(db, activity, event_id, body.user_id, body.token)
    return CheckinResponse(
        message="Check-in successful",
        event_id=record.event_id,
        user_id=record.user_id,
        checked_in_at=record.checked_in_at,
    )


@router.get("/{event_id}/checkin-token", response_model=CheckinTokenResponse)
async def checkin_token_endpoint(
    event_id: str,
    user: User = Depends(require_organizer),
    db: AsyncSession = Depends(get_db, scope="function"),
):
    """Token to encode in the event's QR code. Owner or admin only."""
    event = await get_event(db, event_id)
    ensure_can_manage(event, user)
    return CheckinTokenResponse(event_id=event.id, checkin_token=event.checkin_token)


@router.get("/{event_id}/checkins", response_model=list[CheckinRecordResponse])
async def list_checkins_endpoint(
    event_id: str,
    user: User = Depends(require_organizer),
    db: AsyncSession = Depends(get_db, scope="function"),
):
    event = await get_event(db, event_id)
    ensure_can_manage(event, user)
    return await list_checkins(db, event_id)
