"""
Event service handling CRUD operations.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, func, delete
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from campus_events.core.logging import get_logger
from campus_events.models.activity import ActivityType
from campus_events.models.checkin import CheckinRecord
from campus_events.models.engagement import Comment, Rating
from campus_events.models.event import Event, EventBookmark, EventRegistration
from campus_events.models.user import User, UserRole
from campus_events.schemas.event import EventCreate, EventUpdate
from campus_events.services.activity_service import ActivityLogger

logger = get_logger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def ensure_can_manage(event: Event, user: User) -> None:
    """Only the organizer who owns the event, or an admin, may manage it."""
    if user.role == UserRole.ADMIN.value or event.organizer_id == user.id:
        return
    raise AuthorizationError("Only the event organizer can manage this event", code="not_event_owner")


async def create_event(
    db: AsyncSession,
    activity: ActivityLogger,
    event_data: EventCreate,
    organizer_id: str,
) -> Event:
    """Create a new event. The check-in token is generated here, once."""
    event = Event(
        title=event_data.title,
        club=event_data.club,
        category=event_data.category,
        date=_as_utc(event_data.date),
        time=event_data.time,
        venue=event_data.venue,
        description=event_data.description or "",
        poster_url=event_data.poster_url or "",
        latitude=event_data.latitude,
        longitude=event_data.longitude,
        organizer_id=organizer_id,
        registrations=[],
        bookmarks=[],
    )
    db.add(event)
    await db.flush()

    logger.info("event_created", event_id=event.id, title=event.title, organizer_id=organizer_id)
    activity.log(ActivityType.EVENT_CREATED, {
        "eventId": event.id,
        "title": event.title,
        "organizerId": organizer_id,
    })
    return event


async def get_event(db: AsyncSession, event_id: str) -> Event:
    """Get a single event by ID."""
    result = await db.execute(select(Event).where(Event.id == event_id))
    event = result.scalar_one_or_none()

    if not event:
        raise NotFoundError("Event not found", code="event_not_found")
    return event


async def list_events(
    db: AsyncSession,
    page: int = 1,
    page_size: int = 20,
    upcoming_only: bool = False,
    category: Optional[str] = None,
    club: Optional[str] = None,
) -> tuple[list[Event], int]:
    """
    List events ordered by date, with pagination and optional filters.
    Uses the ix_events_date index for ordering and date filtering.
    """
    query = select(Event)

    if upcoming_only:
        query = query.where(Event.date >= datetime.now(timezone.utc))
    if category:
        query = query.where(Event.category == category)
    if club:
        query = query.where(Event.club == club)

    count_query = select(func.count()).select_from(query.subquery())
    total = (await db.execute(count_query)).scalar()

    events_query = (
        query
        .order_by(Event.date.asc(), Event.created_at.asc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    result = await db.execute(events_query)
    events = list(result.scalars().all())

    return events, total


async def list_all_events(db: AsyncSession) -> list[Event]:
    """Every event in creation order."""
    result = await db.execute(select(Event).order_by(Event.created_at.asc(), Event.id.asc()))
    return list(result.scalars().all())


async def list_calendar(db: AsyncSession) -> list[tuple[str, str, datetime]]:
    result = await db.execute(select(Event.id, Event.title, Event.date).order_by(Event.date.asc()))
    return [tuple(row) for row in result.all()]


async def update_event(
    db: AsyncSession,
    activity: ActivityLogger,
    event_id: str,
    update_data: EventUpdate,
    current_user: User,
) -> Event:
    changes = update_data.model_dump(exclude_unset=True)
    if not changes:
        raise ValidationError("No fields to update")

    event = await get_event(db, event_id)
    ensure_can_manage(event, current_user)

    for field_name, value in changes.items():
        if field_name == "date" and value is not None:
            value = _as_utc(value)
        elif field_name in ("description", "poster_url") and value is None:
            value = ""
        elif value is None and field_name not in ("latitude", "longitude"):
            raise ValidationError(f"{field_name} cannot be null")
        setattr(event, field_name, value)
    await db.flush()

    logger.info("event_updated", event_id=event.id, fields=sorted(changes))
    activity.log(ActivityType.EVENT_UPDATED, {"eventId": event.id, "fields": sorted(changes)})
    return event


async def delete_event(
    db: AsyncSession,
    activity: ActivityLogger,
    event_id: str,
    current_user: User,
) -> None:
    """Delete an event together with its ledger, check-ins, comments and ratings."""
    event = await get_event(db, event_id)
    ensure_can_manage(event, current_user)

    for model in (CheckinRecord, EventRegistration, EventBookmark, Comment, Rating):
        await db.execute(delete(model).where(model.event_id == event_id))
    await db.execute(delete(Event).where(Event.id == event_id))

    logger.info("event_deleted", event_id=event_id, by=current_user.id)
    activity.log(ActivityType.EVENT_DELETED, {"eventId": event_id, "deletedBy": current_user.id})
