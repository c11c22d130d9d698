"""Kiosk endpoints: registration, lookup, check-in/out and the waiver desk."""
from typing import List

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from volunteerhub.api.deps import get_current_staff, get_db
from volunteerhub.core.rate_limit import RATE_LIMITS, limiter
from volunteerhub.schemas import (
    ActiveVolunteer,
    InPersonCompletion,
    RegistrationRequest,
    UserResponse,
    WaiverStatusResponse,
)
from volunteerhub.services.accounting import check_in, check_out
from volunteerhub.services.registry import list_active_volunteers
from volunteerhub.services.users import get_user, register_volunteer, search_users
from volunteerhub.services.waiver import complete_waiver, waiver_state

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=201)
@limiter.limit(RATE_LIMITS["kiosk"])
async def register(
    request: Request,
    registration: RegistrationRequest,
    db: Session = Depends(get_db),
):
    """
    Self-service registration.

    Adults accept the waiver as part of registering. Minors need a
    parent/guardian name; with ``mode="remote"`` their waiver stays pending
    until a guardian signs at the desk.
    """
    return register_volunteer(db, registration)


@router.get("/lookup", response_model=List[UserResponse])
@limiter.limit(RATE_LIMITS["kiosk"])
async def lookup(
    request: Request,
    q: str = Query(..., min_length=2, max_length=100),
    db: Session = Depends(get_db),
):
    """Find returning volunteers by name, email, phone or organization."""
    return search_users(db, q, limit=20)


@router.get("/active", response_model=List[ActiveVolunteer], dependencies=[Depends(get_current_staff)])
async def active_volunteers(db: Session = Depends(get_db)):
    return list_active_volunteers(db)


@router.post("/{user_id}/check-in", response_model=UserResponse)
@limiter.limit(RATE_LIMITS["kiosk"])
async def volunteer_check_in(request: Request, user_id: int, db: Session = Depends(get_db)):
    """
    Check a volunteer in.

    409 with ``code="waiver_required"`` and the current ``waiver_state``
    when the waiver still needs signing; 409 if already checked in.
    """
    return check_in(db, user_id)


@router.post("/{user_id}/check-out", response_model=UserResponse)
@limiter.limit(RATE_LIMITS["kiosk"])
async def volunteer_check_out(request: Request, user_id: int, db: Session = Depends(get_db)):
    return check_out(db, user_id)


@router.get("/{user_id}/waiver", response_model=WaiverStatusResponse)
@limiter.limit(RATE_LIMITS["kiosk"])
async def volunteer_waiver_status(request: Request, user_id: int, db: Session = Depends(get_db)):
    user = get_user(db, user_id)
    return WaiverStatusResponse(user_id=user.id, state=waiver_state(user))


@router.post("/{user_id}/waiver", response_model=UserResponse)
@limiter.limit(RATE_LIMITS["kiosk"])
async def volunteer_waiver(
    request: Request,
    user_id: int,
    completion: InPersonCompletion,
    db: Session = Depends(get_db),
):
    """Record a waiver signed at the desk (by the adult, or a present guardian)."""
    return complete_waiver(db, user_id, completion)
