"""Remote guardian waiver endpoints."""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from volunteerhub.api.deps import get_current_staff, get_db
from volunteerhub.core.exceptions import WaiverRequestExpiredError
from volunteerhub.core.rate_limit import RATE_LIMITS, limiter
from volunteerhub.schemas import (
    PublicWaiverView,
    SuccessResponse,
    WaiverRequestCreate,
    WaiverRequestCreated,
    WaiverRequestResponse,
    WaiverSignRequest,
)
from volunteerhub.services.waiver import create_waiver_request, get_waiver_request, sign_waiver_request

router = APIRouter()


@router.post(
    "/requests",
    response_model=WaiverRequestCreated,
    status_code=201,
    dependencies=[Depends(get_current_staff)],
)
async def request_guardian_waiver(body: WaiverRequestCreate, db: Session = Depends(get_db)):
    """
    Email a guardian a signing link valid for seven days.

    The link is returned as well, so staff can share it another way when
    ``email_sent`` is false.
    """
    request, link, email_sent = create_waiver_request(db, body.user_id, body.parent_email)
    return WaiverRequestCreated(
        request=WaiverRequestResponse.model_validate(request),
        waiver_link=link,
        email_sent=email_sent,
    )


@router.get("/{token}", response_model=PublicWaiverView)
@limiter.limit(RATE_LIMITS["waiver_public"])
async def view_waiver(request: Request, token: str, db: Session = Depends(get_db)):
    """What the public signing page shows; 404 for unknown links."""
    try:
        waiver = get_waiver_request(db, token)
    except WaiverRequestExpiredError:
        return PublicWaiverView(status="expired")
    return PublicWaiverView(status="pending", volunteer_name=waiver.volunteer_name, expires_at=waiver.expires_at)


@router.post("/{token}/sign", response_model=SuccessResponse)
@limiter.limit(RATE_LIMITS["waiver_public"])
async def sign_waiver(request: Request, token: str, body: WaiverSignRequest, db: Session = Depends(get_db)):
    """Sign once; 410 if the link expired or was already used."""
    sign_waiver_request(db, token, body.signature)
    return SuccessResponse(success=True, message="Waiver signed. Thank you!")
