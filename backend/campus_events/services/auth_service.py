"""
Authentication service handling user sign-up and login.
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.exceptions import AuthenticationError, AuthorizationError, ConflictError
from campus_events.core.logging import get_logger
from campus_events.core.security import hash_password, verify_password, create_access_token
from campus_events.models.activity import ActivityType
from campus_events.models.user import User
from campus_events.schemas.user import UserCreate, UserLogin
from campus_events.services.activity_service import ActivityLogger

logger = get_logger(__name__)


async def register_user(db: AsyncSession, activity: ActivityLogger, user_data: UserCreate) -> User:
    """
    Register a new user with hashed password.
    Raises a conflict if the email already exists.
    """
    result = await db.execute(select(User).where(User.email == user_data.email))
    if result.scalar_one_or_none():
        logger.warning("registration_failed", reason="email_exists", email=user_data.email)
        raise ConflictError("Email already registered", code="email_taken")

    user = User(
        name=user_data.name,
        email=user_data.email,
        hashed_password=hash_password(user_data.password),
        role=user_data.role,
        preferences=[],
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as exc:
        # Lost a race with a concurrent sign-up for the same email
        raise ConflictError("Email already registered", code="email_taken") from exc

    logger.info("user_registered", user_id=user.id, role=user.role)
    activity.log(ActivityType.USER_REGISTERED, {"userId": user.id, "role": user.role})
    return user


async def authenticate_user(db: AsyncSession, login_data: UserLogin) -> tuple[str, User]:
    """
    Authenticate user and return a JWT access token with the user.
    Raises 401 for bad credentials and 403 for a role mismatch.
    """
    result = await db.execute(select(User).where(User.email == login_data.email))
    user = result.scalar_one_or_none()

    if not user or not verify_password(login_data.password, user.hashed_password):
        logger.warning("login_failed", email=login_data.email)
        raise AuthenticationError("Invalid email or password", code="invalid_credentials")

    if not user.is_active:
        raise AuthorizationError("Account is deactivated", code="account_inactive")

    if login_data.role is not None and login_data.role.value != user.role:
        logger.warning("login_failed", user_id=user.id, reason="role_mismatch")
        raise AuthorizationError("Incorrect role login", code="role_mismatch")

    token = create_access_token(data={"sub": user.id, "role": user.role})
    logger.info("user_logged_in", user_id=user.id)
    return token, user
