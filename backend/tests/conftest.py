"""
Pytest fixtures for test database, client, and authentication.

Every test gets its own SQLite database file. The app's session factory
dependency is overridden, so request sessions and the background activity
sink both write to it.
"""

import os

os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from campus_events.main import app
from campus_events.db.base import Base
from campus_events.db.session import get_session_factory
from campus_events.models import Event, EventRegistration, User
from campus_events.services.activity_service import ActivityLogger
from tests.factories import headers_for, make_event, make_user


@pytest_asyncio.fixture(scope="function")
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Fresh schema in a throwaway database file."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client whose requests use the test database."""
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


class RecordingActivityLogger(ActivityLogger):
    """Collects entries instead of scheduling them."""

    def __init__(self):
        super().__init__([])
        self.entries = []

    def log(self, activity_type, payload):
        self.entries.append((activity_type, payload))


@pytest.fixture
def activity() -> RecordingActivityLogger:
    return RecordingActivityLogger()


@pytest_asyncio.fixture
async def student(db_session: AsyncSession) -> User:
    return await make_user(db_session, "Sam Student", "sam@campus.edu", "student", ["Music", "DramaClub"])


@pytest_asyncio.fixture
async def other_student(db_session: AsyncSession) -> User:
    return await make_user(db_session, "Alex Other", "alex@campus.edu", "student")


@pytest_asyncio.fixture
async def organizer(db_session: AsyncSession) -> User:
    return await make_user(db_session, "Olive Organizer", "olive@campus.edu", "organizer")


@pytest_asyncio.fixture
async def other_organizer(db_session: AsyncSession) -> User:
    return await make_user(db_session, "Oscar Organizer", "oscar@campus.edu", "organizer")


@pytest_asyncio.fixture
async def admin(db_session: AsyncSession) -> User:
    return await make_user(db_session, "Ada Admin", "ada@campus.edu", "admin")


@pytest.fixture
def student_headers(student: User) -> dict:
    return headers_for(student)


@pytest.fixture
def organizer_headers(organizer: User) -> dict:
    return headers_for(organizer)


@pytest_asyncio.fixture
async def test_event(db_session: AsyncSession, organizer: User) -> Event:
    return await make_event(db_session, organizer)


@pytest_asyncio.fixture
async def registered_student(db_session: AsyncSession, test_event: Event, student: User) -> User:
    """The student, registered for test_event."""
    db_session.add(EventRegistration(event_id=test_event.id, user_id=student.id))
    await db_session.commit()
    return student
