"""User records: registration, staff edits, search and removal."""
from datetime import date, datetime, timedelta
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from volunteerhub.core.constants import ADULT_AGE, RECENT_USER_DAYS
from volunteerhub.core.exceptions import InvalidInputError, UserNotFoundError
from volunteerhub.core.logging_config import get_logger
from volunteerhub.core.sanitization import (
    MAX_NAME_LENGTH,
    MAX_TEXT_LENGTH,
    normalize_email,
    sanitize_text,
    validate_user_input,
)
from volunteerhub.core.utils import calculate_age, to_utc, utcnow
from volunteerhub.db.models import User
from volunteerhub.schemas.user import RegistrationRequest, UserCreate, UserUpdate

logger = get_logger(__name__)

USER_FILTERS = ("all", "volunteers", "donors", "active", "recent")
REQUIRED_PROFILE_FIELDS = ("name", "email", "phone", "allow_communication")


def is_minor_on(date_of_birth: Optional[date], today: date) -> bool:
    return date_of_birth is not None and calculate_age(date_of_birth, today) < ADULT_AGE


def _clean_profile(data: UserCreate) -> dict:
    """Validate and normalize the fields shared by every way of creating a user."""
    errors = validate_user_input(data.name, data.email, data.phone)
    if errors:
        raise InvalidInputError(errors)

    try:
        return {
            "name": sanitize_text(data.name, max_length=MAX_NAME_LENGTH),
            "email": normalize_email(data.email),
            "phone": data.phone.strip(),
            "city": sanitize_text(data.city, max_length=MAX_TEXT_LENGTH),
            "organization": sanitize_text(data.organization, max_length=MAX_TEXT_LENGTH),
            "profession": sanitize_text(data.profession, max_length=MAX_TEXT_LENGTH),
            "date_of_birth": data.date_of_birth,
            "parent_guardian_name": sanitize_text(data.parent_guardian_name, max_length=MAX_NAME_LENGTH) or None,
            "allow_communication": data.allow_communication,
        }
    except ValueError as e:
        raise InvalidInputError(str(e))


def _insert(db: Session, user: User) -> User:
    try:
        db.add(user)
        db.commit()
    except SQLAlchemyError as e:
        logger.error("user_create_failed", error=str(e))
        db.rollback()
        raise
    db.refresh(user)
    return user


def create_user(db: Session, data: UserCreate, now: Optional[datetime] = None) -> User:
    """Staff-entered user; the waiver still has to be completed before check-in."""
    now = to_utc(now or utcnow())
    fields = _clean_profile(data)
    user = _insert(db, User(
        **fields,
        is_minor=is_minor_on(fields["date_of_birth"], now.date()),
        waiver_signed=False,
        total_hours=0.0,
        total_bags=0,
        is_checked_in=False,
        created_at=now,
    ))
    logger.info("user_created", user_id=user.id, source="staff")
    return user


def register_volunteer(db: Session, registration: RegistrationRequest, now: Optional[datetime] = None) -> User:
    """
    Self-service registration.

    Adults must accept the waiver and are signed immediately. Minors must name
    a parent/guardian and acknowledge the in-person waiver; at a walk-up desk
    the guardian is present and the waiver is complete right away, while a
    remote pre-registration leaves it pending until they arrive.

    Raises:
        InvalidInputError: bad contact details, missing waiver acceptance or
            missing guardian name for a minor
    """
    now = to_utc(now or utcnow())
    fields = _clean_profile(registration)
    minor = is_minor_on(fields["date_of_birth"], now.date())

    errors = []
    if minor and not fields["parent_guardian_name"]:
        errors.append("Please provide parent/guardian name for minors")
    if not registration.waiver_accepted:
        errors.append("Please complete the waiver to register")
    if errors:
        raise InvalidInputError(errors)

    signed_now = not minor or registration.mode == "walk_up"
    user = _insert(db, User(
        **fields,
        is_minor=minor,
        waiver_signed=signed_now,
        waiver_signed_at=now if signed_now else None,
        waiver_method="in_person" if signed_now else None,
        total_hours=0.0,
        total_bags=0,
        is_checked_in=False,
        created_at=now,
    ))
    logger.info(
        "volunteer_registered",
        user_id=user.id,
        minor=minor,
        mode=registration.mode,
        waiver_signed=signed_now,
    )
    return user


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise UserNotFoundError(user_id)
    return user


def update_user(db: Session, user_id: int, updates: UserUpdate, now: Optional[datetime] = None) -> User:
    """
    Staff edit of profile fields.

    Totals and check-in state are derived elsewhere and cannot be set here.
    """
    now = to_utc(now or utcnow())
    user = get_user(db, user_id)
    changes = updates.model_dump(exclude_unset=True)
    cleared = sorted(field for field in REQUIRED_PROFILE_FIELDS if field in changes and changes[field] is None)
    if cleared:
        raise InvalidInputError([f"{field} cannot be empty" for field in cleared])

    merged = {
        "name": changes.get("name", user.name),
        "email": changes.get("email", user.email),
        "phone": changes.get("phone", user.phone),
    }
    errors = validate_user_input(merged["name"], merged["email"], merged["phone"])
    if errors:
        raise InvalidInputError(errors)

    try:
        for field, value in changes.items():
            if field == "email":
                value = normalize_email(value)
            elif field == "phone":
                value = value.strip()
            elif field in ("name", "parent_guardian_name"):
                value = sanitize_text(value, max_length=MAX_NAME_LENGTH) or (None if field != "name" else value)
            elif field in ("city", "organization", "profession"):
                value = sanitize_text(value, max_length=MAX_TEXT_LENGTH)
            setattr(user, field, value)
    except ValueError as e:
        db.rollback()
        raise InvalidInputError(str(e))

    if "date_of_birth" in changes:
        user.is_minor = is_minor_on(user.date_of_birth, now.date())

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(user)
    logger.info("user_updated", user_id=user_id, fields=sorted(changes))
    return user


def delete_user(db: Session, user_id: int) -> bool:
    """Remove a user with their sessions, donations and waiver requests."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        return False

    try:
        db.delete(user)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    logger.info("user_deleted", user_id=user_id)
    return True


def search_users(db: Session, term: str, limit: int = 50) -> List[User]:
    """Case-insensitive substring match over name, email, phone and organization."""
    term = (term or "").strip()
    if not term:
        return []
    pattern = f"%{term}%"
    return db.query(User).filter(
        or_(
            User.name.ilike(pattern),
            User.email.ilike(pattern),
            User.phone.ilike(pattern),
            User.organization.ilike(pattern),
        )
    ).order_by(User.name).limit(limit).all()


def list_users(
    db: Session,
    filter_type: str = "all",
    search: Optional[str] = None,
    now: Optional[datetime] = None,
) -> List[User]:
    """All users for the staff table: checked-in users first, then newest first."""
    if filter_type not in USER_FILTERS:
        raise InvalidInputError(f"Unknown filter: {filter_type}")
    now = to_utc(now or utcnow())

    query = db.query(User)
    if filter_type == "volunteers":
        query = query.filter(User.total_hours > 0)
    elif filter_type == "donors":
        query = query.filter(User.total_bags > 0)
    elif filter_type == "active":
        query = query.filter(User.is_checked_in.is_(True))
    elif filter_type == "recent":
        query = query.filter(User.created_at > now - timedelta(days=RECENT_USER_DAYS))

    if search and search.strip():
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(
                User.name.ilike(pattern),
                User.email.ilike(pattern),
                User.organization.ilike(pattern),
            )
        )

    return query.order_by(User.is_checked_in.desc(), User.created_at.desc(), User.id.desc()).all()


def list_communication_opt_ins(db: Session) -> List[User]:
    return db.query(User).filter(User.allow_communication.is_(True)).order_by(User.name).all()
