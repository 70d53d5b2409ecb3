"""
Comments and ratings on events.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.logging import get_logger
from campus_events.models.activity import ActivityType
from campus_events.models.engagement import Comment, Rating
from campus_events.schemas.engagement import CommentCreate, RatingCreate
from campus_events.services.activity_service import ActivityLogger
from campus_events.services.event_service import get_event
from campus_events.services.user_service import get_user

logger = get_logger(__name__)


async def add_comment(
    db: AsyncSession,
    activity: ActivityLogger,
    event_id: str,
    comment_data: CommentCreate,
) -> Comment:
    await get_event(db, event_id)
    await get_user(db, comment_data.user_id)

    comment = Comment(event_id=event_id, user_id=comment_data.user_id, text=comment_data.text)
    db.add(comment)
    await db.flush()

    logger.info("comment_added", comment_id=comment.id, event_id=event_id, user_id=comment.user_id)
    activity.log(ActivityType.COMMENT_ADDED, {"eventId": event_id, "userId": comment.user_id})
    return comment


async def list_comments(db: AsyncSession, event_id: str) -> list[Comment]:
    """Newest comments first."""
    await get_event(db, event_id)
    result = await db.execute(
        select(Comment)
        .where(Comment.event_id == event_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
    )
    return list(result.scalars().all())


async def add_rating(
    db: AsyncSession,
    activity: ActivityLogger,
    event_id: str,
    rating_data: RatingCreate,
) -> Rating:
    await get_event(db, event_id)
    await get_user(db, rating_data.user_id)

    rating = Rating(
        event_id=event_id,
        user_id=rating_data.user_id,
        rating=rating_data.rating,
        review=rating_data.review,
    )
    db.add(rating)
    await db.flush()

    logger.info("rating_added", rating_id=rating.id, event_id=event_id, rating=rating.rating)
    activity.log(ActivityType.RATING_ADDED, {
        "eventId": event_id,
        "userId": rating.user_id,
        "rating": rating.rating,
    })
    return rating


async def summarize_ratings(db: AsyncSession, event_id: str) -> tuple[float, list[Rating]]:
    """Return (average, ratings). The average of no ratings is 0."""
    await get_event(db, event_id)
    result = await db.execute(
        select(Rating).where(Rating.event_id == event_id).order_by(Rating.created_at.asc(), Rating.id.asc())
    )
    ratings = list(result.scalars().all())
    if not ratings:
        return 0.0, ratings
    return sum(r.rating for r in ratings) / len(ratings), ratings
