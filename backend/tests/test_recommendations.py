"""
Tests for preference-based recommendations.
"""

from types import SimpleNamespace

import pytest
from httpx import AsyncClient

from campus_events.services.recommendation_service import rank_events, score_event
from tests.factories import make_event


def ev(id, category, club):
    return SimpleNamespace(id=id, category=category, club=club)


def test_scores_and_order():
    prefs = {"Music", "DramaClub"}
    events = [ev(1, "Music", "X"), ev(2, "Sports", "DramaClub"), ev(3, "Sports", "Y")]

    assert [score_event(prefs, e) for e in events] == [2, 1, 0]
    assert [e.id for e, _ in rank_events(prefs, events)] == [1, 2, 3]


def test_category_and_club_add_up():
    assert score_event(["Music", "DramaClub"], ev(1, "Music", "DramaClub")) == 3


def test_ties_keep_retrieval_order():
    events = [ev(i, "Sports", "Y") for i in range(4)] + [ev(9, "Music", "Y")]
    ranked = rank_events({"Music"}, events)
    assert [e.id for e, _ in ranked] == [9, 0, 1, 2, 3]


def test_top_five_only():
    events = [ev(i, "Music", "Y") for i in range(8)]
    ranked = rank_events({"Music"}, events)
    assert [e.id for e, _ in ranked] == [0, 1, 2, 3, 4]


def test_no_preferences_scores_zero():
    ranked = rank_events([], [ev(1, "Music", "X"), ev(2, "Art", "Y")])
    assert [(e.id, s) for e, s in ranked] == [(1, 0), (2, 0)]


@pytest.mark.asyncio
async def test_recommendations_endpoint(client: AsyncClient, db_session, organizer, student):
    # student prefers Music and DramaClub
    music = await make_event(db_session, organizer, title="Jazz Night", category="Music", club="X")
    drama = await make_event(db_session, organizer, title="Hamlet", category="Theatre", club="DramaClub")
    other = await make_event(db_session, organizer, title="Chess Open", category="Games", club="ChessClub")

    response = await client.get(f"/api/v1/users/{student.id}/recommendations")
    assert response.status_code == 200
    data = response.json()
    assert [e["id"] for e in data] == [music.id, drama.id, other.id]
    assert [e["score"] for e in data] == [2, 1, 0]
    assert all("checkinToken" not in e for e in data)


@pytest.mark.asyncio
async def test_recommendations_unknown_user(client: AsyncClient):
    response = await client.get("/api/v1/users/ghost/recommendations")
    assert response.status_code == 404
    assert response.json()["code"] == "user_not_found"
