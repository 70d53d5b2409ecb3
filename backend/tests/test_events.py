"""
Tests for event CRUD endpoints.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from campus_events.models import CheckinRecord, Comment, EventRegistration
from tests.factories import future_date, headers_for, make_event


def event_payload(**overrides) -> dict:
    payload = {
        "title": "Python Workshop",
        "club": "CodingClub",
        "category": "Tech",
        "date": future_date().isoformat(),
        "time": "14:00",
        "venue": "Lab 3",
        "description": "Intro to async Python",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_create_event(client: AsyncClient, organizer, organizer_headers):
    """Organizers can create events; the response carries the check-in token."""
    response = await client.post("/api/v1/events", json=event_payload(), headers=organizer_headers)
    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "Python Workshop"
    assert data["organizerId"] == organizer.id
    assert data["registeredUsers"] == []
    assert data["bookmarkedBy"] == []
    assert data["posterUrl"] == ""
    assert len(data["checkinToken"]) == 36


@pytest.mark.asyncio
async def test_create_event_tokens_are_unique(client: AsyncClient, organizer_headers):
    first = await client.post("/api/v1/events", json=event_payload(), headers=organizer_headers)
    second = await client.post("/api/v1/events", json=event_payload(), headers=organizer_headers)
    assert first.json()["checkinToken"] != second.json()["checkinToken"]


@pytest.mark.asyncio
async def test_create_event_unauthenticated(client: AsyncClient):
    response = await client.post("/api/v1/events", json=event_payload())
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_event_as_student(client: AsyncClient, student_headers):
    """Students cannot create events."""
    response = await client.post("/api/v1/events", json=event_payload(), headers=student_headers)
    assert response.status_code == 403
    assert response.json()["code"] == "insufficient_role"


@pytest.mark.asyncio
async def test_create_event_missing_fields(client: AsyncClient, organizer_headers):
    payload = event_payload()
    del payload["venue"]
    response = await client.post("/api/v1/events", json=payload, headers=organizer_headers)
    assert response.status_code == 400
    assert "venue" in response.json()["error"]


@pytest.mark.asyncio
async def test_list_events(client: AsyncClient, db_session, organizer, test_event):
    await make_event(db_session, organizer, title="Earlier Talk", date=future_date(days=2))

    response = await client.get("/api/v1/events")
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert data["page"] == 1
    # Ordered by date ascending
    assert [e["title"] for e in data["events"]] == ["Earlier Talk", "Spring Concert"]
    assert all("checkinToken" not in e for e in data["events"])


@pytest.mark.asyncio
async def test_list_events_filters_and_pagination(client: AsyncClient, db_session, organizer, test_event):
    await make_event(db_session, organizer, title="Match", category="Sports", club="Athletics")

    response = await client.get("/api/v1/events", params={"category": "Sports"})
    assert [e["title"] for e in response.json()["events"]] == ["Match"]

    response = await client.get("/api/v1/events", params={"page": 2, "page_size": 1})
    data = response.json()
    assert data["pageSize"] == 1
    assert data["total"] == 2
    assert len(data["events"]) == 1


@pytest.mark.asyncio
async def test_calendar(client: AsyncClient, test_event):
    response = await client.get("/api/v1/events/calendar")
    assert response.status_code == 200
    assert response.json() == [
        {"id": test_event.id, "title": "Spring Concert", "date": response.json()[0]["date"]}
    ]


@pytest.mark.asyncio
async def test_get_event(client: AsyncClient, test_event):
    response = await client.get(f"/api/v1/events/{test_event.id}")
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == test_event.id
    assert data["venue"] == "Main Hall"
    assert "checkinToken" not in data


@pytest.mark.asyncio
async def test_get_event_not_found(client: AsyncClient):
    response = await client.get("/api/v1/events/99999")
    assert response.status_code == 404
    assert response.json() == {"error": "Event not found", "code": "event_not_found"}


@pytest.mark.asyncio
async def test_update_event_by_owner(client: AsyncClient, test_event, organizer_headers):
    response = await client.put(
        f"/api/v1/events/{test_event.id}",
        json={"venue": "Open Air Stage", "title": "Spring Concert (moved)"},
        headers=organizer_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["venue"] == "Open Air Stage"
    assert data["title"] == "Spring Concert (moved)"
    assert data["club"] == "MusicSociety"


@pytest.mark.asyncio
async def test_update_cannot_change_checkin_token(client: AsyncClient, test_event, organizer_headers):
    original = test_event.checkin_token
    response = await client.put(
        f"/api/v1/events/{test_event.id}",
        json={"checkinToken": "attacker-chosen", "venue": "Room 1"},
        headers=organizer_headers,
    )
    assert response.status_code == 200

    response = await client.get(f"/api/v1/events/{test_event.id}/checkin-token", headers=organizer_headers)
    assert response.json()["checkinToken"] == original


@pytest.mark.asyncio
async def test_update_event_empty_body(client: AsyncClient, test_event, organizer_headers):
    response = await client.put(f"/api/v1/events/{test_event.id}", json={}, headers=organizer_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_event_by_other_organizer(client: AsyncClient, test_event, other_organizer):
    response = await client.put(
        f"/api/v1/events/{test_event.id}",
        json={"venue": "Elsewhere"},
        headers=headers_for(other_organizer),
    )
    assert response.status_code == 403
    assert response.json()["code"] == "not_event_owner"


@pytest.mark.asyncio
async def test_admin_can_update_any_event(client: AsyncClient, test_event, admin):
    response = await client.put(
        f"/api/v1/events/{test_event.id}",
        json={"time": "19:30"},
        headers=headers_for(admin),
    )
    assert response.status_code == 200
    assert response.json()["time"] == "19:30"


@pytest.mark.asyncio
async def test_delete_event_removes_dependents(
    client: AsyncClient, session_factory, test_event, registered_student, organizer_headers
):
    await client.post(
        f"/api/v1/events/{test_event.id}/checkin",
        json={"userId": registered_student.id, "token": test_event.checkin_token},
    )
    await client.post(
        f"/api/v1/events/{test_event.id}/comments",
        json={"userId": registered_student.id, "text": "See you there"},
    )

    response = await client.delete(f"/api/v1/events/{test_event.id}", headers=organizer_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Event deleted"}

    response = await client.get(f"/api/v1/events/{test_event.id}")
    assert response.status_code == 404

    async with session_factory() as session:
        for model in (EventRegistration, CheckinRecord, Comment):
            count = await session.scalar(
                select(func.count()).select_from(model).where(model.event_id == test_event.id)
            )
            assert count == 0


@pytest.mark.asyncio
async def test_delete_event_by_student(client: AsyncClient, test_event, student_headers):
    response = await client.delete(f"/api/v1/events/{test_event.id}", headers=student_headers)
    assert response.status_code == 403
