"""Analytics schemas."""
from datetime import date, datetime
from typing import Dict, Optional
from pydantic import BaseModel


class DateRange(BaseModel):
    """Inclusive [start, end] window; both None means all time."""
    preset: str
    label: str
    start: Optional[datetime] = None
    end: Optional[datetime] = None


class Overview(BaseModel):
    total_users: int
    total_hours: float
    total_bags: int
    active_volunteers: int
    avg_hours_per_volunteer: float
    avg_bags_per_donor: float


class RangeStats(BaseModel):
    range_hours: float
    range_volunteers: int
    range_sessions: int
    range_bags: int
    range_donations: int


class DailyTotals(BaseModel):
    day: date
    hours: float
    bags: int


class Dashboard(BaseModel):
    date_range: DateRange
    overview: Overview
    range: RangeStats
    profession_breakdown: Dict[str, int]
    age_breakdown: Dict[str, int]
