"""Staff user management endpoints."""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from volunteerhub.api.deps import get_current_staff, get_db
from volunteerhub.schemas import (
    ActiveSessionUpdate,
    DonationResponse,
    HoursRecalculated,
    SessionEntry,
    StaffIdentity,
    SuccessResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from volunteerhub.services.accounting import (
    edit_active_session,
    force_check_out,
    list_user_sessions,
    recalculate_user_hours,
)
from volunteerhub.services.donations import list_user_donations
from volunteerhub.services.users import (
    create_user,
    delete_user,
    get_user,
    list_communication_opt_ins,
    list_users,
    search_users,
    update_user,
)

router = APIRouter(dependencies=[Depends(get_current_staff)])


@router.get("", response_model=List[UserResponse])
async def get_users(
    filter_type: str = Query("all", alias="filter", pattern="^(all|volunteers|donors|active|recent)$"),
    search: Optional[str] = Query(None, max_length=100),
    db: Session = Depends(get_db),
):
    """All users, currently checked-in first, then newest registrations."""
    return list_users(db, filter_type, search)


@router.post("", response_model=UserResponse, status_code=201)
async def add_user(user: UserCreate, db: Session = Depends(get_db)):
    return create_user(db, user)


@router.get("/search", response_model=List[UserResponse])
async def find_users(q: str = Query(..., min_length=1, max_length=100), db: Session = Depends(get_db)):
    return search_users(db, q)


@router.get("/communication-opt-ins", response_model=List[UserResponse])
async def communication_opt_ins(db: Session = Depends(get_db)):
    return list_communication_opt_ins(db)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user_detail(user_id: int, db: Session = Depends(get_db)):
    return get_user(db, user_id)


@router.patch("/{user_id}", response_model=UserResponse)
async def edit_user(user_id: int, updates: UserUpdate, db: Session = Depends(get_db)):
    return update_user(db, user_id, updates)


@router.delete("/{user_id}", response_model=SuccessResponse)
async def remove_user(user_id: int, db: Session = Depends(get_db)):
    """Delete a user together with their sessions, donations and waiver requests."""
    if not delete_user(db, user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return SuccessResponse(success=True, message="User deleted")


@router.get("/{user_id}/sessions", response_model=List[SessionEntry])
async def user_sessions(
    user_id: int,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    db: Session = Depends(get_db),
):
    """Session history with the running session (``kind="active"``) first."""
    return list_user_sessions(db, user_id, start=start, end=end)


@router.get("/{user_id}/donations", response_model=List[DonationResponse])
async def user_donations(user_id: int, db: Session = Depends(get_db)):
    return list_user_donations(db, user_id)


@router.patch("/{user_id}/active-session", response_model=UserResponse)
async def move_active_session(user_id: int, body: ActiveSessionUpdate, db: Session = Depends(get_db)):
    return edit_active_session(db, user_id, body.check_in_time)


@router.post("/{user_id}/force-check-out", response_model=Optional[UserResponse])
async def staff_force_check_out(
    user_id: int,
    staff: StaffIdentity = Depends(get_current_staff),
    db: Session = Depends(get_db),
):
    """
    Check a volunteer out on their behalf.

    Returns null when the volunteer was not checked in; nothing is written.
    """
    return force_check_out(db, user_id, f"Checked out by {staff.display_name}")


@router.post("/{user_id}/recalculate-hours", response_model=HoursRecalculated)
async def rebuild_hours(user_id: int, db: Session = Depends(get_db)):
    return HoursRecalculated(user_id=user_id, total_hours=recalculate_user_hours(db, user_id))
