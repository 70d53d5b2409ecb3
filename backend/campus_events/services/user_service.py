"""
User profile reads and edits.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.exceptions import NotFoundError, ValidationError
from campus_events.core.logging import get_logger
from campus_events.models.activity import ActivityType
from campus_events.models.user import User
from campus_events.schemas.user import UserUpdate
from campus_events.services.activity_service import ActivityLogger

logger = get_logger(__name__)


async def get_user(db: AsyncSession, user_id: str) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user:
        raise NotFoundError("User not found", code="user_not_found")
    return user


async def update_user(
    db: AsyncSession,
    activity: ActivityLogger,
    user_id: str,
    update_data: UserUpdate,
) -> User:
    """Update name and/or preferences. Role and email are not editable."""
    changes = update_data.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        raise ValidationError("No fields to update")

    user = await get_user(db, user_id)
    if "preferences" in changes:
        # Keep first occurrence order, drop duplicates and blanks
        changes["preferences"] = list(dict.fromkeys(p.strip() for p in changes["preferences"] if p.strip()))

    for field_name, value in changes.items():
        setattr(user, field_name, value)
    await db.flush()

    logger.info("user_updated", user_id=user.id, fields=sorted(changes))
    activity.log(ActivityType.PROFILE_UPDATED, {"userId": user.id, "fields": sorted(changes)})
    return user
