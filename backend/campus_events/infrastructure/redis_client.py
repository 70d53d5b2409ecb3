"""
Redis client for the live activity channel.
Separated from business logic; every caller must tolerate a None client.

Redis is advisory only: the database is the source of truth for the
activity feed, so an unavailable Redis degrades to "no live updates".
"""

from typing import Optional

import redis.asyncio as redis

from campus_events.core.config import get_settings
from campus_events.core.logging import get_logger
from campus_events.core.metrics import redis_connection_errors

logger = get_logger(__name__)

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> Optional[redis.Redis]:
    """Get or create the Redis connection. Returns None if Redis is disabled or down."""
    global _redis_client
    settings = get_settings()

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is None:
        client = redis.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
            health_check_interval=30,
        )
        try:
            await client.ping()
        except Exception as e:
            redis_connection_errors.inc()
            logger.error("redis_connection_failed", error=str(e))
            await client.aclose()
            return None
        _redis_client = client
        logger.info("redis_connected", url=settings.REDIS_URL)

    return _redis_client


async def close_redis() -> None:
    """Close Redis connection on shutdown."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


async def redis_status() -> str:
    if not get_settings().REDIS_ENABLED:
        return "disabled"
    client = await get_redis()
    return "connected" if client else "unavailable"
