"""
Activity sink implementations.
"""

import json

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from campus_events.infrastructure.redis_client import get_redis
from campus_events.models.activity import ActivityEntry
from campus_events.services.interfaces.activity_sink import ActivityRecord, ActivitySink


class DatabaseActivitySink(ActivitySink):
    """Persists entries in the activity_feed table using its own session."""

    name = "database"

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def write(self, record: ActivityRecord) -> None:
        async with self._session_factory() as session:
            session.add(ActivityEntry(
                type=record.type.value,
                payload=record.payload,
                created_at=record.created_at,
            ))
            await session.commit()


class RedisActivitySink(ActivitySink):
    """Publishes entries on a pub/sub channel for live feed consumers."""

    name = "redis"

    def __init__(self, channel: str):
        self.channel = channel

    async def write(self, record: ActivityRecord) -> None:
        client = await get_redis()
        if client is None:
            # Redis down: live subscribers miss this entry, the feed still has it
            return
        await client.publish(self.channel, json.dumps(record.to_dict(), default=str))
