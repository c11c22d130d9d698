"""Session accounting: check-in/out, hours, and the users' running totals.

``User.total_hours`` is a materialized aggregate of the user's
volunteer_sessions rows. Every path that writes sessions recomputes it from
the rows in the same transaction instead of adding or subtracting deltas.
"""
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from volunteerhub.core.exceptions import (
    AlreadyCheckedInError,
    InvalidInputError,
    NotCheckedInError,
    SessionNotFoundError,
    UserNotFoundError,
    WaiverRequiredError,
)
from volunteerhub.core.logging_config import get_logger
from volunteerhub.core.sanitization import MAX_NOTES_LENGTH, sanitize_text
from volunteerhub.core.utils import hours_between, round_to_quarter_hour, to_utc, utcnow
from volunteerhub.db.models import HourAdjustment, User, VolunteerSession
from volunteerhub.schemas.auth import StaffIdentity
from volunteerhub.schemas.session import ActiveSession, ClosedSession
from volunteerhub.services.waiver import waiver_state

logger = get_logger(__name__)


def calculate_hours_worked(check_in_time: datetime, check_out_time: datetime) -> float:
    """Billable hours for an interval, rounded to the nearest quarter hour."""
    return round_to_quarter_hour(hours_between(check_in_time, check_out_time))


def _get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise UserNotFoundError(user_id)
    return user


def _sum_session_hours(db: Session, user_id: int) -> float:
    total = db.query(func.coalesce(func.sum(VolunteerSession.hours_worked), 0.0)).filter(
        VolunteerSession.user_id == user_id
    ).scalar()
    return float(total or 0.0)


def _refresh_total_hours(db: Session, user: User) -> float:
    """Recompute total_hours from session rows (pending rows included)."""
    db.flush()
    user.total_hours = _sum_session_hours(db, user.id)
    return user.total_hours


def recalculate_user_hours(db: Session, user_id: int) -> float:
    """Rebuild a user's total_hours from scratch and persist it."""
    user = _get_user(db, user_id)
    try:
        total = _refresh_total_hours(db, user)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("user_hours_recalculated", user_id=user_id, total_hours=total)
    return total


def check_in(db: Session, user_id: int, now: Optional[datetime] = None) -> User:
    """
    Mark a volunteer as checked in.

    Only the User flags change; the session row is written at check-out.

    Raises:
        UserNotFoundError: unknown user
        WaiverRequiredError: waiver not completed yet
        AlreadyCheckedInError: user is already checked in (including a
            concurrent request that won the race)
    """
    now = to_utc(now or utcnow())
    user = _get_user(db, user_id)

    if not user.waiver_signed:
        raise WaiverRequiredError(user_id, waiver_state(user))

    # Compare-and-swap so a double submit cannot check in twice
    updated = db.query(User).filter(
        User.id == user_id,
        User.is_checked_in.is_(False),
    ).update(
        {User.is_checked_in: True, User.last_check_in: now},
        synchronize_session=False,
    )
    if updated == 0:
        db.rollback()
        raise AlreadyCheckedInError(user_id)

    db.commit()
    db.refresh(user)
    logger.info("volunteer_checked_in", user_id=user_id)
    return user


def _close_session(db: Session, user: User, now: datetime, notes: Optional[str]) -> Optional[User]:
    """Write the session row and clear the check-in; None if someone beat us to it."""
    check_in_time = to_utc(user.last_check_in)
    hours = calculate_hours_worked(check_in_time, now)

    try:
        cleared = db.query(User).filter(
            User.id == user.id,
            User.is_checked_in.is_(True),
        ).update(
            {User.is_checked_in: False, User.last_check_in: None},
            synchronize_session=False,
        )
        if cleared == 0:
            db.rollback()
            return None

        db.add(VolunteerSession(
            user_id=user.id,
            check_in_time=check_in_time,
            check_out_time=now,
            hours_worked=hours,
            notes=notes,
        ))
        db.flush()
        db.refresh(user)
        _refresh_total_hours(db, user)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    db.refresh(user)
    logger.info(
        "volunteer_checked_out",
        user_id=user.id,
        hours_worked=hours,
        total_hours=user.total_hours,
        notes=notes,
    )
    return user


def check_out(db: Session, user_id: int, now: Optional[datetime] = None) -> User:
    """
    Close the volunteer's current interval.

    Raises:
        UserNotFoundError: unknown user
        NotCheckedInError: user is not checked in
    """
    now = to_utc(now or utcnow())
    user = _get_user(db, user_id)
    if not user.is_checked_in or user.last_check_in is None:
        raise NotCheckedInError(user_id)

    result = _close_session(db, user, now, notes=None)
    if result is None:
        raise NotCheckedInError(user_id)
    return result


def force_check_out(
    db: Session,
    user_id: int,
    reason: str,
    now: Optional[datetime] = None,
) -> Optional[User]:
    """
    Check a volunteer out on someone else's behalf, tagging the session.

    Returns None without writing anything when the user does not exist or is
    already offline, so repeated or concurrent calls are harmless.
    """
    now = to_utc(now or utcnow())
    user = db.query(User).filter(User.id == user_id).first()
    if not user or not user.is_checked_in or user.last_check_in is None:
        return None

    notes = _clean_note(reason)
    return _close_session(db, user, now, notes=notes)


def _clean_note(text: Optional[str]) -> Optional[str]:
    try:
        return sanitize_text(text, max_length=MAX_NOTES_LENGTH) or None
    except ValueError as e:
        raise InvalidInputError(str(e))


def _record_adjustment(
    db: Session,
    user: User,
    session_id: Optional[int],
    old_hours: float,
    new_hours: float,
    reason: Optional[str],
    staff: Optional[StaffIdentity],
) -> None:
    db.add(HourAdjustment(
        user_id=user.id,
        session_id=session_id,
        old_hours=old_hours,
        new_hours=new_hours,
        reason=reason,
        adjusted_by=staff.display_name if staff else "system",
    ))


def edit_session(
    db: Session,
    session_id: int,
    check_in_time: datetime,
    check_out_time: datetime,
    notes: Optional[str] = None,
    staff: Optional[StaffIdentity] = None,
    reason: Optional[str] = None,
) -> VolunteerSession:
    """
    Change a stored session's interval and rebuild the owner's total.

    Raises:
        SessionNotFoundError: unknown session
        InvalidInputError: check-out earlier than check-in, or unusable notes
            or reason; nothing is changed
    """
    check_in_time = to_utc(check_in_time)
    check_out_time = to_utc(check_out_time)
    if check_out_time < check_in_time:
        raise InvalidInputError("Check-out time must be after check-in time")
    cleaned_notes = _clean_note(notes) if notes is not None else None
    reason = _clean_note(reason)

    record = db.query(VolunteerSession).filter(VolunteerSession.id == session_id).first()
    if not record:
        raise SessionNotFoundError(session_id)

    user = _get_user(db, record.user_id)
    old_hours = record.hours_worked

    try:
        record.check_in_time = check_in_time
        record.check_out_time = check_out_time
        record.hours_worked = calculate_hours_worked(check_in_time, check_out_time)
        if notes is not None:
            record.notes = cleaned_notes

        _record_adjustment(db, user, record.id, old_hours, record.hours_worked, reason, staff)
        _refresh_total_hours(db, user)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    db.refresh(record)
    logger.info(
        "session_edited",
        session_id=session_id,
        user_id=user.id,
        old_hours=old_hours,
        new_hours=record.hours_worked,
        total_hours=user.total_hours,
        staff=staff.display_name if staff else None,
    )
    return record


def delete_session(
    db: Session,
    session_id: int,
    staff: Optional[StaffIdentity] = None,
    reason: Optional[str] = None,
) -> bool:
    """Delete a stored session and rebuild the owner's total."""
    reason = _clean_note(reason)
    record = db.query(VolunteerSession).filter(VolunteerSession.id == session_id).first()
    if not record:
        return False

    user = _get_user(db, record.user_id)
    old_hours = record.hours_worked

    try:
        db.delete(record)
        _record_adjustment(db, user, session_id, old_hours, 0.0, reason, staff)
        _refresh_total_hours(db, user)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info(
        "session_deleted",
        session_id=session_id,
        user_id=user.id,
        removed_hours=old_hours,
        total_hours=user.total_hours,
        staff=staff.display_name if staff else None,
    )
    return True


def edit_active_session(db: Session, user_id: int, check_in_time: datetime) -> User:
    """
    Move the start of a running session.

    The running session has no row and no check-out time, so only
    ``last_check_in`` on the user can change.
    """
    user = _get_user(db, user_id)
    if not user.is_checked_in or user.last_check_in is None:
        raise NotCheckedInError(user_id)

    user.last_check_in = to_utc(check_in_time)
    db.commit()
    db.refresh(user)
    logger.info("active_session_edited", user_id=user_id)
    return user


def get_active_session(user: User, now: Optional[datetime] = None) -> Optional[ActiveSession]:
    if not user.is_checked_in or user.last_check_in is None:
        return None
    now = to_utc(now or utcnow())
    check_in_time = to_utc(user.last_check_in)
    return ActiveSession(
        user_id=user.id,
        check_in_time=check_in_time,
        elapsed_hours=round(hours_between(check_in_time, now), 2),
    )


def list_user_sessions(
    db: Session,
    user_id: int,
    now: Optional[datetime] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List:
    """
    A user's sessions, newest first, with the running one (if any) on top.

    ``start``/``end`` bound check_in_time inclusively; the running session is
    included when its check-in falls inside the same bounds.
    """
    user = _get_user(db, user_id)

    query = db.query(VolunteerSession).filter(VolunteerSession.user_id == user_id)
    if start is not None:
        query = query.filter(VolunteerSession.check_in_time >= to_utc(start))
    if end is not None:
        query = query.filter(VolunteerSession.check_in_time <= to_utc(end))
    rows = query.order_by(VolunteerSession.check_in_time.desc()).all()

    entries = []
    active = get_active_session(user, now)
    if active is not None:
        in_range = (start is None or active.check_in_time >= to_utc(start)) and (
            end is None or active.check_in_time <= to_utc(end)
        )
        if in_range:
            entries.append(active)

    entries.extend(ClosedSession.model_validate(row) for row in rows)
    return entries
