"""
Tests for the registration ledger and bookmarks.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from campus_events.core.exceptions import ConflictError, NotFoundError
from campus_events.models import EventBookmark, EventRegistration
from campus_events.services.registration_service import register_for_event


@pytest.mark.asyncio
async def test_register_for_event(client: AsyncClient, test_event, student):
    response = await client.post(f"/api/v1/events/{test_event.id}/register", json={"userId": student.id})
    assert response.status_code == 200
    assert response.json() == {"message": "Registered successfully"}

    event = (await client.get(f"/api/v1/events/{test_event.id}")).json()
    assert event["registeredUsers"] == [student.id]


@pytest.mark.asyncio
async def test_register_twice_keeps_single_membership(client: AsyncClient, session_factory, test_event, student):
    url = f"/api/v1/events/{test_event.id}/register"
    assert (await client.post(url, json={"userId": student.id})).status_code == 200

    response = await client.post(url, json={"userId": student.id})
    assert response.status_code == 400
    assert response.json() == {"error": "Already registered", "code": "already_registered"}

    event = (await client.get(f"/api/v1/events/{test_event.id}")).json()
    assert event["registeredUsers"].count(student.id) == 1

    async with session_factory() as session:
        rows = await session.scalar(
            select(func.count()).select_from(EventRegistration).where(EventRegistration.event_id == test_event.id)
        )
    assert rows == 1


@pytest.mark.asyncio
async def test_register_unknown_event(client: AsyncClient, student):
    response = await client.post("/api/v1/events/missing/register", json={"userId": student.id})
    assert response.status_code == 404
    assert response.json()["code"] == "event_not_found"


@pytest.mark.asyncio
async def test_register_unknown_user(client: AsyncClient, test_event):
    response = await client.post(f"/api/v1/events/{test_event.id}/register", json={"userId": "ghost"})
    assert response.status_code == 404
    assert response.json()["code"] == "user_not_found"


@pytest.mark.asyncio
async def test_register_missing_user_id(client: AsyncClient, test_event):
    response = await client.post(f"/api/v1/events/{test_event.id}/register", json={})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_register_service_conflict(session_factory, test_event, registered_student, activity):
    async with session_factory() as session:
        with pytest.raises(ConflictError):
            await register_for_event(session, activity, test_event.id, registered_student.id)
    assert activity.entries == []


@pytest.mark.asyncio
async def test_register_service_not_found(session_factory, student, activity):
    async with session_factory() as session:
        with pytest.raises(NotFoundError):
            await register_for_event(session, activity, "missing", student.id)


@pytest.mark.asyncio
async def test_bookmark_is_idempotent(client: AsyncClient, session_factory, test_event, student):
    url = f"/api/v1/events/{test_event.id}/bookmark"
    for _ in range(2):
        response = await client.post(url, json={"userId": student.id})
        assert response.status_code == 200
        assert response.json() == {"message": "Bookmarked"}

    event = (await client.get(f"/api/v1/events/{test_event.id}")).json()
    assert event["bookmarkedBy"] == [student.id]

    async with session_factory() as session:
        rows = await session.scalar(select(func.count()).select_from(EventBookmark))
    assert rows == 1


@pytest.mark.asyncio
async def test_bookmark_unknown_event(client: AsyncClient, student):
    response = await client.post("/api/v1/events/missing/bookmark", json={"userId": student.id})
    assert response.status_code == 404
