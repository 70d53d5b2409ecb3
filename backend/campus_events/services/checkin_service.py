"""
QR check-in verification.

CHECK ORDER
===========

A scan presents (event_id, user_id, token). The checks run in a fixed
order and stop at the first failure, so a scanner can tell the attendee
what to do next:

  1. Event exists                    -> 404 event_not_found
  2. Token matches the event's token -> 403 invalid_token
  3. User is in the registration set -> 403 not_registered
  4. No check-in record for the pair -> 400 already_checked_in

IDEMPOTENCY GUARD
=================

Step 4 is not a lookup followed by a write. Two scans of the same code
processed at the same time would both see "no record" and both write.
Instead the record is created with INSERT ... ON CONFLICT DO NOTHING on
the (event_id, user_id) primary key: the database decides which insert
wins, and the loser observes a zero row count and is reported as
already checked in.
"""

import secrets
import time

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.exceptions import AuthorizationError, ConflictError, NotFoundError
from campus_events.core.logging import get_logger
from campus_events.core.metrics import checkin_latency, record_checkin
from campus_events.db.base import utcnow
from campus_events.db.operations import insert_if_absent
from campus_events.models.activity import ActivityType
from campus_events.models.checkin import CheckinRecord
from campus_events.models.event import Event, EventRegistration
from campus_events.services.activity_service import ActivityLogger

logger = get_logger(__name__)


def token_matches(supplied: str, expected: str) -> bool:
    """Exact, case-sensitive comparison in constant time."""
    return secrets.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


async def _load_event(db: AsyncSession, event_id: str) -> Event:
    result = await db.execute(select(Event).where(Event.id == event_id))
    event = result.scalar_one_or_none()
    if not event:
        raise NotFoundError("Event not found", code="event_not_found")
    return event


async def _ensure_registered(db: AsyncSession, event_id: str, user_id: str) -> None:
    result = await db.execute(
        select(EventRegistration.user_id).where(
            EventRegistration.event_id == event_id,
            EventRegistration.user_id == user_id,
        )
    )
    if result.scalar_one_or_none() is None:
        raise AuthorizationError("User not registered for event", code="not_registered")


async def check_in(
    db: AsyncSession,
    activity: ActivityLogger,
    event_id: str,
    user_id: str,
    token: str,
) -> CheckinRecord:
    """
    Verify a QR scan and record the attendee as checked in.

    Returns the new CheckinRecord. Raises NotFoundError, AuthorizationError
    or ConflictError as described in the module docstring.
    """
    start = time.perf_counter()
    try:
        event = await _load_event(db, event_id)

        if not token_matches(token, event.checkin_token):
            raise AuthorizationError("Invalid QR token", code="invalid_token")

        await _ensure_registered(db, event_id, user_id)

        checked_in_at = utcnow()
        created = await insert_if_absent(
            db,
            CheckinRecord.__table__,
            {"event_id": event_id, "user_id": user_id, "checked_in_at": checked_in_at},
        )
        if not created:
            raise ConflictError("Already checked in", code="already_checked_in")

    except (NotFoundError, AuthorizationError, ConflictError) as e:
        record_checkin(e.code)
        logger.info("checkin_rejected", event_id=event_id, user_id=user_id, reason=e.code)
        raise
    finally:
        checkin_latency.observe(time.perf_counter() - start)

    record_checkin("success")
    logger.info("checkin_succeeded", event_id=event_id, user_id=user_id)
    activity.log(ActivityType.USER_CHECKED_IN, {"userId": user_id, "eventId": event_id})

    return CheckinRecord(event_id=event_id, user_id=user_id, checked_in_at=checked_in_at)


async def list_checkins(db: AsyncSession, event_id: str) -> list[CheckinRecord]:
    """Attendance list for an event, oldest first."""
    result = await db.execute(
        select(CheckinRecord)
        .where(CheckinRecord.event_id == event_id)
        .order_by(CheckinRecord.checked_in_at.asc())
    )
    return list(result.scalars().all())
