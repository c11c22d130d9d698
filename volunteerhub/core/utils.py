"""General utility functions."""
import math
from datetime import date, datetime, time, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from volunteerhub.core.constants import (
    AGE_BUCKETS,
    HOUR_INCREMENTS,
    OLDEST_AGE_BUCKET,
    WEEKDAYS,
)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """Convert datetime to UTC timezone."""
    if dt.tzinfo is None:
        # Naive values come back from SQLite; everything is stored as UTC
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_timezone(dt: datetime, tz: ZoneInfo) -> datetime:
    """Convert datetime to specified timezone."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(tz)


def hours_between(start: datetime, end: datetime) -> float:
    """Elapsed hours from start to end (negative if end is earlier)."""
    return (to_utc(end) - to_utc(start)).total_seconds() / 3600


def round_to_quarter_hour(hours: float) -> float:
    """
    Round a duration in hours to the nearest 0.25.

    Halves round up (2.5 quarters -> 3 quarters), including for negative
    durations, so -0.625h becomes -0.5h. The value is not clamped at zero.

    Examples:
        37 minutes (0.6166h) -> 0.5
        53 minutes (0.8833h) -> 1.0
    """
    return math.floor(hours * HOUR_INCREMENTS + 0.5) / HOUR_INCREMENTS


def calculate_age(birth_date: date, today: date) -> int:
    """Whole years between birth_date and today."""
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        # Birthday hasn't happened yet this year
        age -= 1
    return age


def age_bucket(age: int) -> str:
    for upper, label in AGE_BUCKETS:
        if age < upper:
            return label
    return OLDEST_AGE_BUCKET


def day_name(dt: datetime) -> str:
    """Lower-case English weekday name ("monday" ... "sunday")."""
    return WEEKDAYS[dt.weekday()]


def time_of_day(dt: datetime) -> str:
    """Zero-padded 24h "HH:MM"."""
    return dt.strftime("%H:%M")


def start_of_day(day: date, tz: ZoneInfo) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)


def end_of_day(day: date, tz: ZoneInfo) -> datetime:
    return datetime.combine(day, time.max, tzinfo=tz)


def format_elapsed(minutes: int) -> str:
    """Render elapsed minutes as "2h 05m" / "45m"."""
    hours, mins = divmod(max(minutes, 0), 60)
    if hours:
        return f"{hours}h {mins:02d}m"
    return f"{mins}m"


def slugify_label(label: Optional[str]) -> str:
    """"Last Month" -> "last-month"."""
    if not label:
        return "all-time"
    return "-".join(label.lower().split())
