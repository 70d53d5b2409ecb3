"""
Event CRUD endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.api.deps import get_activity_logger, get_current_user, require_organizer
from campus_events.db.session import get_db
from campus_events.models.user import User
from campus_events.schemas.base import MessageResponse
from campus_events.schemas.event import (
    CalendarEntry,
    EventCreate,
    EventCreatedResponse,
    EventListResponse,
    EventResponse,
    EventUpdate,
)
from campus_events.services.activity_service import ActivityLogger
from campus_events.services.event_service import (
    create_event,
    delete_event,
    get_event,
    list_calendar,
    list_events,
    update_event,
)

router = APIRouter(prefix="/events", tags=["Events"])


@router.post("", response_model=EventCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(
    event_data: EventCreate,
    user: User = Depends(require_organizer),
    db: AsyncSession = Depends(get_db, scope="function"),
    activity: ActivityLogger = Depends(get_activity_logger),
):
    """Create a new event. Organizers and admins only; the response carries the check-in token."""
    return await create_event(db, activity, event_data, user.id)


@router.get("", response_model=EventListResponse)
async def list_events_endpoint(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    upcoming_only: bool = Query(False),
    category: Optional[str] = Query(None),
    club: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db, scope="function"),
):
    """List events by date with pagination."""
    events, total = await list_events(db, page, page_size, upcoming_only, category, club)
    return EventListResponse(
        events=[EventResponse.model_validate(e) for e in events],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/calendar", response_model=list[CalendarEntry])
async def calendar_endpoint(db: AsyncSession = Depends(get_db, scope="function")):
    rows = await list_calendar(db)
    return [CalendarEntry(id=event_id, title=title, date=date) for event_id, title, date in rows]


@router.get("/{event_id}", response_model=EventResponse)
async def get_event_endpoint(event_id: str, db: AsyncSession = Depends(get_db, scope="function")):
    return await get_event(db, event_id)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event_endpoint(
    event_id: str,
    update_data: EventUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db, scope="function"),
    activity: ActivityLogger = Depends(get_activity_logger),
):
    """Update descriptive fields. The owning organizer or an admin only."""
    return await update_event(db, activity, event_id, update_data, user)


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_event_endpoint(
    event_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db, scope="function"),
    activity: ActivityLogger = Depends(get_activity_logger),
):
    await delete_event(db, activity, event_id, user)
    return MessageResponse(message="Event deleted")
