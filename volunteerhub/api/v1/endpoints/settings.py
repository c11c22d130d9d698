"""Auto-checkout settings endpoints."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from volunteerhub.api.deps import get_current_staff, get_db
from volunteerhub.schemas import AutoCheckoutResult, AutoCheckoutSettings
from volunteerhub.services.auto_checkout import (
    get_auto_checkout_settings,
    run_auto_checkout,
    run_scheduled_auto_checkout,
    update_auto_checkout_settings,
)

router = APIRouter(dependencies=[Depends(get_current_staff)])


@router.get("/auto-checkout", response_model=AutoCheckoutSettings)
async def read_auto_checkout(db: Session = Depends(get_db)):
    return get_auto_checkout_settings(db)


@router.put("/auto-checkout", response_model=AutoCheckoutSettings)
async def save_auto_checkout(body: AutoCheckoutSettings, db: Session = Depends(get_db)):
    return update_auto_checkout_settings(db, body)


@router.post("/auto-checkout/run", response_model=AutoCheckoutResult)
async def run_now(
    respect_schedule: bool = Query(False),
    db: Session = Depends(get_db),
):
    """
    Check everyone out now.

    With ``respect_schedule=true`` this behaves like the scheduled trigger
    and does nothing outside the configured end-of-day window.
    """
    if respect_schedule:
        return run_scheduled_auto_checkout(db)
    return run_auto_checkout(db)
