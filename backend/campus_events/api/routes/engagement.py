"""
Comment and rating endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.api.deps import get_activity_logger
from campus_events.db.session import get_db
from campus_events.schemas.engagement import (
    CommentCreate,
    CommentResponse,
    RatingCreate,
    RatingResponse,
    RatingSummary,
)
from campus_events.services.activity_service import ActivityLogger
from campus_events.services.engagement_service import (
    add_comment,
    add_rating,
    list_comments,
    summarize_ratings,
)

router = APIRouter(prefix="/events", tags=["Engagement"])


@router.post("/{event_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def add_comment_endpoint(
    event_id: str,
    body: CommentCreate,
    db: AsyncSession = Depends(get_db, scope="function"),
    activity: ActivityLogger = Depends(get_activity_logger),
):
    return await add_comment(db, activity, event_id, body)


@router.get("/{event_id}/comments", response_model=list[CommentResponse])
async def list_comments_endpoint(event_id: str, db: AsyncSession = Depends(get_db, scope="function")):
    """Comments on an event, newest first."""
    return await list_comments(db, event_id)


@router.post("/{event_id}/ratings", response_model=RatingResponse, status_code=status.HTTP_201_CREATED)
async def add_rating_endpoint(
    event_id: str,
    body: RatingCreate,
    db: AsyncSession = Depends(get_db, scope="function"),
    activity: ActivityLogger = Depends(get_activity_logger),
):
    return await add_rating(db, activity, event_id, body)


@router.get("/{event_id}/ratings", response_model=RatingSummary)
async def ratings_endpoint(event_id: str, db: AsyncSession = Depends(get_db, scope="function")):
    average, ratings = await summarize_ratings(db, event_id)
    return RatingSummary(
        average=round(average, 2),
        count=len(ratings),
        ratings=[RatingResponse.model_validate(r) for r in ratings],
    )
