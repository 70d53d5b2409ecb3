"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter

from campus_events.api.routes import activity, auth, checkin, engagement, events, registrations, users
from campus_events.core.config import get_settings

api_router = APIRouter(prefix=get_settings().API_PREFIX)
api_router.include_router(auth.router)
api_router.include_router(events.router)
api_router.include_router(registrations.router)
api_router.include_router(checkin.router)
api_router.include_router(engagement.router)
api_router.include_router(activity.router)
api_router.include_router(users.router)
