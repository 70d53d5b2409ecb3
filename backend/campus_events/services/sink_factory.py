"""
Activity sink factory.
Configures which sinks receive activity entries.
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from campus_events.core.config import get_settings
from campus_events.services.activity_sinks import DatabaseActivitySink, RedisActivitySink
from campus_events.services.interfaces.activity_sink import ActivitySink


def build_activity_sinks(session_factory: async_sessionmaker[AsyncSession]) -> list[ActivitySink]:
    """
    Build the configured sinks.

    The database sink is always present because the feed endpoint reads
    from it. The Redis publisher is added when REDIS_ENABLED is set.
    """
    settings = get_settings()
    sinks: list[ActivitySink] = [DatabaseActivitySink(session_factory)]

    if settings.REDIS_ENABLED:
        sinks.append(RedisActivitySink(settings.ACTIVITY_CHANNEL))

    return sinks
