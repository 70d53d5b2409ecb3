"""
Shared FastAPI dependencies: database session, activity logger and the
authenticated user.
"""

from typing import Optional

from fastapi import BackgroundTasks, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from campus_events.core.exceptions import AuthenticationError, AuthorizationError, NotFoundError
from campus_events.core.security import decode_access_token
from campus_events.db.session import get_db, get_session_factory
from campus_events.models.user import User, UserRole
from campus_events.services.activity_service import ActivityLogger
from campus_events.services.sink_factory import build_activity_sinks
from campus_events.services.user_service import get_user

bearer_scheme = HTTPBearer(auto_error=False)


def get_activity_logger(
    background_tasks: BackgroundTasks,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> ActivityLogger:
    return ActivityLogger(build_activity_sinks(session_factory), background_tasks)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db, scope="function"),
) -> User:
    if credentials is None:
        raise AuthenticationError("Missing bearer token")

    payload = decode_access_token(credentials.credentials)
    try:
        user = await get_user(db, payload["sub"])
    except NotFoundError as exc:
        raise AuthenticationError("Token expired or invalid", code="invalid_token") from exc

    if not user.is_active:
        raise AuthorizationError("Account is deactivated", code="account_inactive")
    return user


def require_roles(*roles: UserRole):
    """Dependency factory: the current user must hold one of `roles`."""
    allowed = {role.value for role in roles}

    async def _check(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            raise AuthorizationError("Insufficient role for this action", code="insufficient_role")
        return user

    return _check


require_organizer = require_roles(UserRole.ORGANIZER, UserRole.ADMIN)
