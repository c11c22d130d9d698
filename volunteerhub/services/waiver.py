"""Waiver gate: who may check in, and the two ways to get there.

A user reaches WAIVER_COMPLETE either in person (an adult signing their own
attestation, or a guardian who is physically present signing for a minor) or
through a remote guardian link that was emailed ahead of time.
"""
from datetime import datetime, timedelta
from typing import Callable, Optional, Tuple, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from volunteerhub.core import config
from volunteerhub.core.exceptions import (
    InvalidInputError,
    UserNotFoundError,
    WaiverRequestExpiredError,
    WaiverRequestNotFoundError,
)
from volunteerhub.core.logging_config import get_logger
from volunteerhub.core.mail import MailResult, send_transactional_email
from volunteerhub.core.sanitization import MAX_NAME_LENGTH, normalize_email, sanitize_signature, sanitize_text
from volunteerhub.core.security import generate_waiver_token
from volunteerhub.core.utils import to_utc, utcnow
from volunteerhub.db.models import User, WaiverRequest
from volunteerhub.schemas.waiver import InPersonCompletion, RemoteGuardianCompletion, WaiverState

logger = get_logger(__name__)

Mailer = Callable[[str, str, dict], MailResult]


def waiver_state(user: Optional[User]) -> WaiverState:
    """Where a person stands in the waiver flow (None = not registered)."""
    if user is None:
        return WaiverState.NO_WAIVER
    if user.waiver_signed:
        return WaiverState.WAIVER_COMPLETE
    if user.is_minor:
        return WaiverState.MINOR_WAIVER_PENDING
    return WaiverState.ADULT_WAIVER_PENDING


def _mark_complete(user: User, method: str, now: datetime) -> None:
    user.waiver_signed = True
    user.waiver_signed_at = now
    user.waiver_method = method


def complete_waiver_in_person(
    db: Session,
    user_id: int,
    signer_name: str,
    acknowledged: bool,
    guardian_name: Optional[str] = None,
    now: Optional[datetime] = None,
) -> User:
    """
    Record a waiver signed at the desk.

    Adults attest for themselves. Minors need the name of the guardian who is
    present; that name replaces whatever was given at registration.
    Completing an already complete waiver is a no-op.

    Raises:
        UserNotFoundError: unknown user
        InvalidInputError: missing acknowledgement, signer or guardian name
    """
    now = to_utc(now or utcnow())
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise UserNotFoundError(user_id)

    if user.waiver_signed:
        return user

    errors = []
    if not acknowledged:
        errors.append("The waiver must be acknowledged")
    if not sanitize_text(signer_name, max_length=MAX_NAME_LENGTH):
        errors.append("Signer name is required")
    guardian_name = sanitize_text(guardian_name, max_length=MAX_NAME_LENGTH)
    if user.is_minor and not guardian_name:
        errors.append("A parent/guardian must be present and sign for a minor")
    if errors:
        raise InvalidInputError(errors)

    if user.is_minor:
        user.parent_guardian_name = guardian_name
    _mark_complete(user, "in_person", now)
    db.commit()
    db.refresh(user)

    logger.info("waiver_completed", user_id=user_id, method="in_person", minor=user.is_minor)
    return user


def build_waiver_link(token: str) -> str:
    return f"{config.settings.FRONTEND_URL.rstrip('/')}/waiver/{token}"


def create_waiver_request(
    db: Session,
    user_id: int,
    parent_email: str,
    now: Optional[datetime] = None,
    mailer: Mailer = send_transactional_email,
) -> Tuple[WaiverRequest, str, bool]:
    """
    Start the remote guardian flow: store a token and email the link.

    The request is saved even if the email cannot be delivered so staff can
    hand the link over another way.

    Returns:
        (request, waiver_link, email_sent)
    """
    now = to_utc(now or utcnow())
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise UserNotFoundError(user_id)

    request = WaiverRequest(
        token=generate_waiver_token(),
        user_id=user.id,
        parent_email=normalize_email(parent_email),
        volunteer_name=user.name,
        status="pending",
        expires_at=now + timedelta(days=config.settings.WAIVER_REQUEST_TTL_DAYS),
        created_at=now,
    )
    try:
        db.add(request)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(request)

    link = build_waiver_link(request.token)
    result = mailer(
        request.parent_email,
        "generic",
        {
            "subject": f"Waiver needed for {user.name}",
            "message": (
                f"{user.name} has registered to volunteer. As their parent or guardian, "
                "please review and sign the liability waiver."
            ),
            "url": link,
            "link_text": "Review and sign the waiver",
        },
    )
    if not result.ok:
        logger.warning("waiver_email_failed", user_id=user_id, request_id=request.id, error=result.error)

    logger.info("waiver_request_created", user_id=user_id, request_id=request.id, email_sent=result.ok)
    return request, link, result.ok


def _is_usable(request: WaiverRequest, now: datetime) -> bool:
    return request.status == "pending" and now < to_utc(request.expires_at)


def get_waiver_request(db: Session, token: str, now: Optional[datetime] = None) -> WaiverRequest:
    """
    Resolve a public token to a request that can still be signed.

    Raises:
        WaiverRequestNotFoundError: unknown token
        WaiverRequestExpiredError: past expires_at or already signed
    """
    now = to_utc(now or utcnow())
    request = db.query(WaiverRequest).filter(WaiverRequest.token == token).first()
    if not request:
        raise WaiverRequestNotFoundError()
    if not _is_usable(request, now):
        raise WaiverRequestExpiredError()
    return request


def sign_waiver_request(
    db: Session,
    token: str,
    signature: str,
    now: Optional[datetime] = None,
) -> User:
    """
    Accept a guardian's typed signature for a pending request.

    The pending -> signed transition is a conditional update, so a link can
    only ever be used once even if submitted twice at the same moment.
    """
    now = to_utc(now or utcnow())
    try:
        signature = sanitize_signature(signature)
    except ValueError as e:
        raise InvalidInputError(str(e))

    request = get_waiver_request(db, token, now)

    try:
        updated = db.query(WaiverRequest).filter(
            WaiverRequest.id == request.id,
            WaiverRequest.status == "pending",
        ).update(
            {
                WaiverRequest.status: "signed",
                WaiverRequest.parent_signature: signature,
                WaiverRequest.signed_at: now,
            },
            synchronize_session=False,
        )
        if updated == 0:
            db.rollback()
            raise WaiverRequestExpiredError()

        user = db.query(User).filter(User.id == request.user_id).first()
        _mark_complete(user, "remote_guardian", now)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    db.refresh(user)
    logger.info("waiver_completed", user_id=user.id, method="remote_guardian", request_id=request.id)
    return user


def complete_waiver(
    db: Session,
    user_id: int,
    completion: Union[InPersonCompletion, RemoteGuardianCompletion],
    now: Optional[datetime] = None,
) -> User:
    """Apply either completion variant to a user."""
    if isinstance(completion, InPersonCompletion):
        return complete_waiver_in_person(
            db,
            user_id,
            completion.signer_name,
            completion.acknowledged,
            completion.guardian_name,
            now,
        )

    request = get_waiver_request(db, completion.token, now)
    if request.user_id != user_id:
        raise WaiverRequestNotFoundError()
    return sign_waiver_request(db, completion.token, completion.signature, now)
