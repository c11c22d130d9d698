"""Main API router for v1."""
from fastapi import APIRouter

from volunteerhub.api.v1.endpoints import (
    analytics,
    auth,
    donations,
    export,
    sessions,
    settings,
    users,
    volunteers,
    waivers,
)

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(volunteers.router, prefix="/volunteers", tags=["Kiosk"])
api_router.include_router(donations.router, prefix="/donations", tags=["Donations"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["Sessions"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["Analytics"])
api_router.include_router(settings.router, prefix="/settings", tags=["Settings"])
api_router.include_router(waivers.router, prefix="/waivers", tags=["Waivers"])
api_router.include_router(export.router, prefix="/export", tags=["Export"])
