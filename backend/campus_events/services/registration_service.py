"""
Registration ledger and bookmark sets.

Both are sets of user ids per event stored as (event_id, user_id) rows.
Adding to a set is a single INSERT ... ON CONFLICT DO NOTHING, so repeated
or concurrent calls can never produce a second row for the same pair.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.exceptions import ConflictError
from campus_events.core.logging import get_logger
from campus_events.core.metrics import record_registration
from campus_events.db.operations import insert_if_absent
from campus_events.models.activity import ActivityType
from campus_events.models.event import EventBookmark, EventRegistration
from campus_events.services.activity_service import ActivityLogger
from campus_events.services.event_service import get_event
from campus_events.services.user_service import get_user

logger = get_logger(__name__)


async def register_for_event(
    db: AsyncSession,
    activity: ActivityLogger,
    event_id: str,
    user_id: str,
) -> None:
    """
    Add `user_id` to the event's registration ledger.

    Raises NotFoundError for an unknown event or user and ConflictError
    when the user is already registered.
    """
    await get_event(db, event_id)
    await get_user(db, user_id)

    created = await insert_if_absent(
        db,
        EventRegistration.__table__,
        {"event_id": event_id, "user_id": user_id},
    )
    if not created:
        record_registration("already_registered")
        logger.info("registration_rejected", event_id=event_id, user_id=user_id, reason="already_registered")
        raise ConflictError("Already registered", code="already_registered")

    record_registration("success")
    logger.info("user_registered_for_event", event_id=event_id, user_id=user_id)
    activity.log(ActivityType.USER_REGISTERED_EVENT, {"userId": user_id, "eventId": event_id})


async def bookmark_event(
    db: AsyncSession,
    activity: ActivityLogger,
    event_id: str,
    user_id: str,
) -> bool:
    """
    Add `user_id` to the event's bookmark set. Idempotent.
    Returns True if the bookmark is new.
    """
    await get_event(db, event_id)
    await get_user(db, user_id)

    created = await insert_if_absent(
        db,
        EventBookmark.__table__,
        {"event_id": event_id, "user_id": user_id},
    )
    if created:
        logger.info("event_bookmarked", event_id=event_id, user_id=user_id)
        activity.log(ActivityType.EVENT_BOOKMARKED, {"userId": user_id, "eventId": event_id})
    return created
