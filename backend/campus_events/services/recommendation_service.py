"""
Preference-based event recommendations.

An event scores +2 when its category is one of the user's preferences and
+1 when its club is. Events are ordered by score, highest first; equal
scores keep their retrieval order because sorted() is stable.
"""

from typing import Iterable, Protocol, Sequence, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.models.event import Event
from campus_events.services.event_service import list_all_events
from campus_events.services.user_service import get_user

CATEGORY_WEIGHT = 2
CLUB_WEIGHT = 1


class Scorable(Protocol):
    category: str
    club: str


T = TypeVar("T", bound=Scorable)


def score_event(preferences: Iterable[str], event: Scorable) -> int:
    prefs = set(preferences)
    score = 0
    if event.category in prefs:
        score += CATEGORY_WEIGHT
    if event.club in prefs:
        score += CLUB_WEIGHT
    return score


def rank_events(preferences: Iterable[str], events: Sequence[T], limit: int = 5) -> list[tuple[T, int]]:
    """Pure ranking over already-loaded events; returns (event, score) pairs."""
    prefs = set(preferences)
    scored = [(event, score_event(prefs, event)) for event in events]
    scored = sorted(scored, key=lambda pair: pair[1], reverse=True)
    return scored[:limit]


async def recommend_for_user(db: AsyncSession, user_id: str, limit: int = 5) -> list[tuple[Event, int]]:
    user = await get_user(db, user_id)
    events = await list_all_events(db)
    return rank_events(user.preferences or [], events, limit=limit)
