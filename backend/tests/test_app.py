"""
Tests for operational endpoints and error rendering.
"""

import pytest
from httpx import AsyncClient
from pydantic import ValidationError as PydanticValidationError

from campus_events.core.config import Settings
from campus_events.core.logging import redact_secrets


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "connected"
    assert data["redis"] == "disabled"


@pytest.mark.asyncio
async def test_request_id_header(client: AsyncClient):
    response = await client.get("/", headers={"X-Request-ID": "trace-123"})
    assert response.headers["X-Request-ID"] == "trace-123"
    assert response.headers["X-Response-Time"].endswith("ms")


@pytest.mark.asyncio
async def test_unknown_route(client: AsyncClient):
    response = await client.get("/api/v1/nowhere")
    assert response.status_code == 404
    assert response.json() == {"error": "Route not found", "code": "route_not_found"}


@pytest.mark.asyncio
async def test_metrics_exposed(client: AsyncClient, test_event, registered_student):
    await client.post(
        f"/api/v1/events/{test_event.id}/checkin",
        json={"userId": registered_student.id, "token": test_event.checkin_token},
    )
    response = await client.get("/metrics")
    assert response.status_code == 200
    assert 'checkin_attempts_total{result="success"}' in response.text


def test_secrets_are_redacted():
    event = redact_secrets(None, "info", {"event": "checkin_rejected", "token": "abc", "user_id": "u1"})
    assert event == {"event": "checkin_rejected", "token": "***", "user_id": "u1"}


def test_cors_origins_parsed():
    settings = Settings(CORS_ORIGINS="https://a.edu, https://b.edu,")
    assert settings.cors_origins == ["https://a.edu", "https://b.edu"]


def test_production_requires_secret_key():
    with pytest.raises(PydanticValidationError):
        Settings(ENVIRONMENT="production")
    assert Settings(ENVIRONMENT="production", SECRET_KEY="rotated").is_production
