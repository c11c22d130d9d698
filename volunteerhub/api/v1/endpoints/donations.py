"""Donation logging endpoint."""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from volunteerhub.api.deps import get_db
from volunteerhub.core.rate_limit import RATE_LIMITS, limiter
from volunteerhub.schemas import DonationCreate, DonationResponse
from volunteerhub.services.donations import add_donation

router = APIRouter()


@router.post("", response_model=DonationResponse, status_code=201)
@limiter.limit(RATE_LIMITS["kiosk"])
async def log_donation(request: Request, donation: DonationCreate, db: Session = Depends(get_db)):
    return add_donation(db, donation.user_id, donation.bag_count)
