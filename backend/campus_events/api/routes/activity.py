"""
Activity feed endpoint.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.config import get_settings
from campus_events.db.session import get_db
from campus_events.schemas.activity import ActivityEntryResponse
from campus_events.services.activity_service import list_activity

router = APIRouter(tags=["Activity"])


@router.get("/activity-feed", response_model=list[ActivityEntryResponse])
async def activity_feed(db: AsyncSession = Depends(get_db, scope="function")):
    """Most recent activity, newest first."""
    return await list_activity(db, limit=get_settings().ACTIVITY_FEED_LIMIT)
