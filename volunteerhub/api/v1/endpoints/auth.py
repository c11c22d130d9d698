"""Staff authentication endpoints."""
from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from volunteerhub.api.deps import get_current_staff, get_db, get_login_tracker
from volunteerhub.core import config
from volunteerhub.core.constants import STAFF_COOKIE_NAME
from volunteerhub.core.rate_limit import RATE_LIMITS, LoginAttemptTracker, limiter
from volunteerhub.core.security import create_access_token
from volunteerhub.schemas import (
    PasswordChangeRequest,
    StaffAccountCreate,
    StaffAccountCreated,
    StaffIdentity,
    StaffLoginRequest,
    SuccessResponse,
)
from volunteerhub.services.auth import authenticate_staff, change_password, create_staff_account

router = APIRouter()


@router.post("/staff/login", response_model=StaffIdentity)
@limiter.limit(RATE_LIMITS["staff_login"])
async def staff_login(
    request: Request,
    response: Response,
    credentials: StaffLoginRequest,
    db: Session = Depends(get_db),
    tracker: LoginAttemptTracker = Depends(get_login_tracker),
) -> StaffIdentity:
    """
    Sign a staff member in with email or username and set the auth cookie.

    Five failed attempts for the same identifier lock it for fifteen minutes
    (429 with Retry-After). The returned identity tells the client whether a
    password change is required before anything else.
    """
    identity = authenticate_staff(db, credentials.identifier, credentials.password, tracker)

    token = create_access_token(data={"sub": str(identity.id), "role": identity.role})
    response.set_cookie(
        key=STAFF_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=config.settings.ENVIRONMENT == "production",
        samesite="lax",
        max_age=config.settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return identity


@router.post("/staff/logout", response_model=SuccessResponse)
async def staff_logout(response: Response) -> SuccessResponse:
    """Clear the auth cookie. Safe to call when not signed in."""
    response.delete_cookie(key=STAFF_COOKIE_NAME)
    return SuccessResponse(success=True, message="Logged out successfully")


@router.get("/staff/me", response_model=StaffIdentity)
async def current_staff(staff: StaffIdentity = Depends(get_current_staff)) -> StaffIdentity:
    return staff


@router.post("/staff/password", response_model=StaffIdentity)
async def update_password(
    body: PasswordChangeRequest,
    staff: StaffIdentity = Depends(get_current_staff),
    db: Session = Depends(get_db),
) -> StaffIdentity:
    return change_password(db, staff.id, body.new_password)


@router.post("/staff/accounts", response_model=StaffAccountCreated, status_code=201)
async def create_account(
    body: StaffAccountCreate,
    staff: StaffIdentity = Depends(get_current_staff),
    db: Session = Depends(get_db),
) -> StaffAccountCreated:
    """Create a colleague's account; they receive a temporary password by email."""
    return create_staff_account(db, body.email, body.display_name, body.username, body.role, staff)
