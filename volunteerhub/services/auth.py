"""Staff accounts: login with lockout, password changes and invites."""
from typing import Callable

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from volunteerhub.core import config
from volunteerhub.core.exceptions import AuthenticationError, InvalidInputError, NotFoundError
from volunteerhub.core.logging_config import get_logger
from volunteerhub.core.mail import MailResult, send_transactional_email
from volunteerhub.core.rate_limit import LoginAttemptTracker
from volunteerhub.core.sanitization import MAX_NAME_LENGTH, normalize_email, sanitize_text
from volunteerhub.core.security import generate_temporary_password, get_password_hash, verify_password
from volunteerhub.db.models import StaffProfile
from volunteerhub.schemas.auth import StaffAccountCreated, StaffIdentity

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 8
STAFF_ROLES = ("admin", "staff")


def to_identity(profile: StaffProfile) -> StaffIdentity:
    return StaffIdentity(
        id=profile.id,
        display_name=profile.display_name,
        email=profile.email,
        role=profile.role,
        requires_password_change=profile.first_login,
    )


def find_staff(db: Session, identifier: str):
    ident = identifier.strip().lower()
    return db.query(StaffProfile).filter(
        or_(
            func.lower(StaffProfile.email) == ident,
            func.lower(StaffProfile.username) == ident,
        )
    ).first()


def authenticate_staff(
    db: Session,
    identifier: str,
    secret: str,
    tracker: LoginAttemptTracker,
) -> StaffIdentity:
    """
    Check staff credentials.

    The identifier may be an email or a username. Unknown accounts and wrong
    passwords fail the same way and both count toward the lockout.

    Raises:
        AccountLockedError: too many recent failures for this identifier
        AuthenticationError: bad credentials
    """
    tracker.ensure_not_locked(identifier)

    profile = find_staff(db, identifier)
    if profile is None or not verify_password(secret, profile.password_hash):
        left = tracker.record_failure(identifier)
        logger.warning("staff_login_failed", identifier=identifier, attempts_left=left)
        raise AuthenticationError()

    tracker.record_success(identifier)
    logger.info("staff_login_succeeded", staff_id=profile.id, role=profile.role)
    return to_identity(profile)


def get_staff_identity(db: Session, staff_id: int) -> StaffIdentity:
    profile = db.query(StaffProfile).filter(StaffProfile.id == staff_id).first()
    if profile is None:
        raise NotFoundError("Staff account not found")
    return to_identity(profile)


def change_password(db: Session, staff_id: int, new_password: str) -> StaffIdentity:
    if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
        raise InvalidInputError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    profile = db.query(StaffProfile).filter(StaffProfile.id == staff_id).first()
    if profile is None:
        raise NotFoundError("Staff account not found")

    profile.password_hash = get_password_hash(new_password)
    profile.first_login = False
    db.commit()
    db.refresh(profile)
    logger.info("staff_password_changed", staff_id=staff_id)
    return to_identity(profile)


def create_staff_account(
    db: Session,
    email: str,
    display_name: str,
    username: str,
    role: str,
    acting_staff: StaffIdentity,
    mailer: Callable[[str, str, dict], MailResult] = send_transactional_email,
) -> StaffAccountCreated:
    """
    Create a staff login with a temporary password and email an invite.

    Any signed-in staff member may add colleagues. The new account must pick
    its own password on first login.
    """
    if role not in STAFF_ROLES:
        raise InvalidInputError(f"Role must be one of: {', '.join(STAFF_ROLES)}")
    try:
        display_name = sanitize_text(display_name, max_length=MAX_NAME_LENGTH)
    except ValueError as e:
        raise InvalidInputError(str(e))
    if not display_name:
        raise InvalidInputError("Display name is required")

    email = normalize_email(email)
    username = username.strip()
    if find_staff(db, email) is not None or find_staff(db, username) is not None:
        raise InvalidInputError("A staff account with that email or username already exists")

    temporary_password = generate_temporary_password()
    profile = StaffProfile(
        email=email,
        username=username,
        display_name=display_name,
        role=role,
        password_hash=get_password_hash(temporary_password),
        first_login=True,
    )
    try:
        db.add(profile)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise InvalidInputError("A staff account with that email or username already exists")
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(profile)

    result = mailer(
        email,
        "invite",
        {
            "username": username,
            "temporary_password": temporary_password,
            "url": f"{config.settings.FRONTEND_URL.rstrip('/')}/staff/login",
        },
    )
    logger.info(
        "staff_account_created",
        staff_id=profile.id,
        role=role,
        created_by=acting_staff.id,
        invite_sent=result.ok,
    )

    return StaffAccountCreated(
        id=profile.id,
        email=profile.email,
        username=profile.username,
        role=profile.role,
        invite_sent=result.ok,
        message=None if result.ok else "Account created but the invite email could not be sent",
    )
