"""
User profile and recommendation endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.api.deps import get_activity_logger, get_current_user
from campus_events.core.config import get_settings
from campus_events.core.exceptions import AuthorizationError
from campus_events.db.session import get_db
from campus_events.models.user import User, UserRole
from campus_events.schemas.event import EventResponse, RecommendedEvent
from campus_events.schemas.user import UserProfile, UserUpdate
from campus_events.services.activity_service import ActivityLogger
from campus_events.services.recommendation_service import recommend_for_user
from campus_events.services.user_service import get_user, update_user

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/{user_id}", response_model=UserProfile)
async def get_profile(user_id: str, db: AsyncSession = Depends(get_db, scope="function")):
    return await get_user(db, user_id)


@router.put("/{user_id}", response_model=UserProfile)
async def update_profile(
    user_id: str,
    update_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db, scope="function"),
    activity: ActivityLogger = Depends(get_activity_logger),
):
    """Edit name and preferences. Users edit themselves; admins edit anyone."""
    if current_user.id != user_id and current_user.role != UserRole.ADMIN.value:
        raise AuthorizationError("Cannot edit another user's profile", code="not_profile_owner")
    return await update_user(db, activity, user_id, update_data)


@router.get("/{user_id}/recommendations", response_model=list[RecommendedEvent])
async def recommendations(user_id: str, db: AsyncSession = Depends(get_db, scope="function")):
    """Top events for the user's preferences."""
    ranked = await recommend_for_user(db, user_id, limit=get_settings().RECOMMENDATION_LIMIT)
    return [
        RecommendedEvent(**EventResponse.model_validate(event).model_dump(), score=score)
        for event, score in ranked
    ]
