"""
Authentication endpoints: sign-up and login.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.api.deps import get_activity_logger
from campus_events.db.session import get_db
from campus_events.schemas.user import UserCreate, UserResponse, UserLogin, Token
from campus_events.services.activity_service import ActivityLogger
from campus_events.services.auth_service import register_user, authenticate_user

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db, scope="function"),
    activity: ActivityLogger = Depends(get_activity_logger),
):
    """Create a student or organizer account."""
    return await register_user(db, activity, user_data)


@router.post("/login", response_model=Token)
async def login(login_data: UserLogin, db: AsyncSession = Depends(get_db, scope="function")):
    """Authenticate and receive a JWT access token."""
    token, user = await authenticate_user(db, login_data)
    return Token(access_token=token, user=UserResponse.model_validate(user))
