"""
Engine and session management.

The session factory is the single storage-access object of the service.
It is built lazily and handed to handlers through FastAPI dependencies, so
tests (and the activity sinks) can swap in their own factory.
"""

from functools import lru_cache
from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from campus_events.core.config import get_settings
from campus_events.core.exceptions import InternalError
from campus_events.core.logging import get_logger

logger = get_logger(__name__)


@lru_cache()
def get_engine() -> AsyncEngine:
    settings = get_settings()
    kwargs = {"echo": settings.DEBUG, "pool_pre_ping": True}

    if not settings.DATABASE_URL.startswith("sqlite"):
        kwargs.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )
    return create_async_engine(settings.DATABASE_URL, **kwargs)


@lru_cache()
def _default_session_factory() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(get_engine(), class_=AsyncSession, expire_on_commit=False)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Dependency returning the session factory (overridden in tests)."""
    return _default_session_factory()


async def get_db(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> AsyncGenerator[AsyncSession, None]:
    """
    Per-request session: commit on success, roll back on any error.

    Routes declare it with `Depends(get_db, scope="function")` so the commit
    finishes before the response and its background tasks. A failed commit
    is raised as InternalError.
    """
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise

        try:
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error("db_commit_failed", error=str(e))
            raise InternalError("Could not save changes", code="storage_error") from e


async def dispose_engine() -> None:
    if get_engine.cache_info().currsize:
        await get_engine().dispose()
