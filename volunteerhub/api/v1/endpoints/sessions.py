"""Staff corrections to stored sessions."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from volunteerhub.api.deps import get_current_staff, get_db
from volunteerhub.schemas import ClosedSession, SessionUpdate, StaffIdentity, SuccessResponse
from volunteerhub.services.accounting import delete_session, edit_session

router = APIRouter()


@router.patch("/{session_id}", response_model=ClosedSession)
async def update_session(
    session_id: int,
    body: SessionUpdate,
    staff: StaffIdentity = Depends(get_current_staff),
    db: Session = Depends(get_db),
):
    """
    Change a session's times; hours are re-rounded and the volunteer's
    lifetime total is rebuilt. The change is kept in the adjustment log.
    """
    return edit_session(
        db,
        session_id,
        body.check_in_time,
        body.check_out_time,
        notes=body.notes,
        staff=staff,
        reason=body.reason,
    )


@router.delete("/{session_id}", response_model=SuccessResponse)
async def remove_session(
    session_id: int,
    reason: Optional[str] = Query(None, max_length=500),
    staff: StaffIdentity = Depends(get_current_staff),
    db: Session = Depends(get_db),
):
    if not delete_session(db, session_id, staff=staff, reason=reason):
        raise HTTPException(status_code=404, detail="Session not found")
    return SuccessResponse(success=True, message="Session deleted")
