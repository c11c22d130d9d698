"""Shared API dependencies."""
from zoneinfo import ZoneInfo

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from volunteerhub.core.config import settings
from volunteerhub.core.exceptions import NotFoundError
from volunteerhub.core.rate_limit import login_tracker
from volunteerhub.core.security import verify_staff_token
from volunteerhub.db import get_db, get_db_context
from volunteerhub.schemas.auth import StaffIdentity
from volunteerhub.services.auth import get_staff_identity

# Local calendar for date presets, exports and the dashboard
TIMEZONE = ZoneInfo(settings.TIMEZONE)


def get_login_tracker():
    return login_tracker


def get_current_staff(request: Request, db: Session = Depends(get_db)) -> StaffIdentity:
    """The signed-in staff member, reloaded so role and first-login state are current."""
    payload = verify_staff_token(request)
    try:
        return get_staff_identity(db, int(payload["sub"]))
    except (NotFoundError, ValueError):
        raise HTTPException(status_code=401, detail="Not authenticated")


__all__ = ["get_db", "get_db_context", "get_current_staff", "get_login_tracker", "TIMEZONE"]
