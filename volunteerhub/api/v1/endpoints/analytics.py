"""Dashboard analytics endpoints."""
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from volunteerhub.api.deps import TIMEZONE, get_current_staff, get_db
from volunteerhub.schemas import DailyTotals, Dashboard, RangeStats
from volunteerhub.services.analytics import get_daily_totals, get_dashboard, get_range_stats

router = APIRouter(dependencies=[Depends(get_current_staff)])


@router.get("/dashboard", response_model=Dashboard)
async def dashboard(
    preset: str = Query("this_month"),
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db),
):
    """
    Totals, range stats and breakdowns for a named period.

    Presets: today, this_week, this_month, last_month, this_year,
    last_30_days, all_time, or custom with start_date and end_date.
    """
    return get_dashboard(db, preset, tz=TIMEZONE, start_date=start_date, end_date=end_date)


@router.get("/range", response_model=RangeStats)
async def range_stats(
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    db: Session = Depends(get_db),
):
    """Stats over an explicit inclusive window; naive datetimes are read as UTC."""
    return get_range_stats(db, start, end)


@router.get("/daily", response_model=DailyTotals)
async def daily_totals(day: date, db: Session = Depends(get_db)):
    return get_daily_totals(db, day, TIMEZONE)
