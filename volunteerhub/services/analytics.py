"""Dashboard rollups: all-time totals, date-ranged stats and breakdowns."""
from collections import Counter
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, Optional
from zoneinfo import ZoneInfo

from sqlalchemy import func
from sqlalchemy.orm import Session

from volunteerhub.core.constants import UNSPECIFIED_PROFESSION
from volunteerhub.core.exceptions import InvalidInputError
from volunteerhub.core.utils import (
    age_bucket,
    calculate_age,
    end_of_day,
    start_of_day,
    to_timezone,
    to_utc,
    utcnow,
)
from volunteerhub.db.models import Donation, User, VolunteerSession
from volunteerhub.schemas.analytics import DailyTotals, Dashboard, DateRange, Overview, RangeStats

__all__ = [
    "DATE_RANGE_LABELS",
    "calculate_age",
    "age_bucket",
    "resolve_date_range",
    "get_overview",
    "get_range_stats",
    "get_profession_breakdown",
    "get_age_breakdown",
    "get_hours_by_user",
    "get_daily_totals",
    "get_dashboard",
]

DATE_RANGE_LABELS = {
    "today": "Today",
    "this_week": "This Week",
    "this_month": "This Month",
    "last_month": "Last Month",
    "this_year": "This Year",
    "last_30_days": "Last 30 Days",
    "all_time": "All Time",
    "custom": "Custom Range",
}


def resolve_date_range(
    preset: str,
    now: datetime,
    tz: ZoneInfo,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> DateRange:
    """
    Turn a named preset into concrete inclusive bounds in ``tz``.

    this_week and this_month are rolling windows ending now (7 and 30 days
    including today); last_month is the previous calendar month.

    Raises:
        InvalidInputError: unknown preset, or a custom range without both dates
    """
    if preset not in DATE_RANGE_LABELS:
        raise InvalidInputError(f"Unknown date range: {preset}")

    local_now = to_timezone(now, tz)
    today = local_now.date()
    label = DATE_RANGE_LABELS[preset]

    if preset == "all_time":
        return DateRange(preset=preset, label=label)

    if preset == "today":
        start, end = start_of_day(today, tz), local_now
    elif preset == "this_week":
        start, end = start_of_day(today - timedelta(days=6), tz), local_now
    elif preset in ("this_month", "last_30_days"):
        start, end = start_of_day(today - timedelta(days=29), tz), local_now
    elif preset == "last_month":
        last_day = today.replace(day=1) - timedelta(days=1)
        start, end = start_of_day(last_day.replace(day=1), tz), end_of_day(last_day, tz)
    elif preset == "this_year":
        start, end = start_of_day(today.replace(month=1, day=1), tz), local_now
    else:
        if start_date is None or end_date is None:
            raise InvalidInputError("A custom range needs both a start and an end date")
        if end_date < start_date:
            raise InvalidInputError("End date must not be before start date")
        start, end = start_of_day(start_date, tz), end_of_day(end_date, tz)
        label = f"{start_date.isoformat()} to {end_date.isoformat()}"

    return DateRange(preset=preset, label=label, start=to_utc(start), end=to_utc(end))


def _bounded(query, column, start: Optional[datetime], end: Optional[datetime]):
    if start is not None:
        query = query.filter(column >= to_utc(start))
    if end is not None:
        query = query.filter(column <= to_utc(end))
    return query


def get_overview(db: Session) -> Overview:
    total_users, total_hours, total_bags = db.query(
        func.count(User.id),
        func.coalesce(func.sum(User.total_hours), 0.0),
        func.coalesce(func.sum(User.total_bags), 0),
    ).one()
    active = db.query(func.count(User.id)).filter(User.is_checked_in.is_(True)).scalar()

    total_hours = float(total_hours or 0.0)
    total_bags = int(total_bags or 0)
    return Overview(
        total_users=total_users,
        total_hours=total_hours,
        total_bags=total_bags,
        active_volunteers=active or 0,
        avg_hours_per_volunteer=total_hours / total_users if total_users else 0.0,
        avg_bags_per_donor=total_bags / total_users if total_users else 0.0,
    )


def get_range_stats(db: Session, start: Optional[datetime], end: Optional[datetime]) -> RangeStats:
    """Sessions by check_in_time and donations by timestamp within [start, end]."""
    hours, volunteers, sessions = _bounded(
        db.query(
            func.coalesce(func.sum(VolunteerSession.hours_worked), 0.0),
            func.count(func.distinct(VolunteerSession.user_id)),
            func.count(VolunteerSession.id),
        ),
        VolunteerSession.check_in_time,
        start,
        end,
    ).one()
    bags, donations = _bounded(
        db.query(func.coalesce(func.sum(Donation.bag_count), 0), func.count(Donation.id)),
        Donation.timestamp,
        start,
        end,
    ).one()

    return RangeStats(
        range_hours=float(hours or 0.0),
        range_volunteers=volunteers or 0,
        range_sessions=sessions or 0,
        range_bags=int(bags or 0),
        range_donations=donations or 0,
    )


def get_profession_breakdown(users: Iterable[User]) -> Dict[str, int]:
    return dict(Counter((user.profession or "").strip() or UNSPECIFIED_PROFESSION for user in users))


def get_age_breakdown(users: Iterable[User], today: date) -> Dict[str, int]:
    """Users per age bucket; users without a birth date are left out."""
    return dict(Counter(
        age_bucket(calculate_age(user.date_of_birth, today))
        for user in users
        if user.date_of_birth is not None
    ))


def get_hours_by_user(db: Session, start: Optional[datetime], end: Optional[datetime]) -> Dict[int, float]:
    rows = _bounded(
        db.query(VolunteerSession.user_id, func.sum(VolunteerSession.hours_worked)),
        VolunteerSession.check_in_time,
        start,
        end,
    ).group_by(VolunteerSession.user_id).all()
    return {user_id: float(hours or 0.0) for user_id, hours in rows}


def get_daily_totals(db: Session, day: date, tz: ZoneInfo) -> DailyTotals:
    """Hours and bags recorded on one local calendar day."""
    stats = get_range_stats(db, start_of_day(day, tz), end_of_day(day, tz))
    return DailyTotals(day=day, hours=stats.range_hours, bags=stats.range_bags)


def get_dashboard(
    db: Session,
    preset: str,
    now: Optional[datetime] = None,
    tz: Optional[ZoneInfo] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Dashboard:
    now = to_utc(now or utcnow())
    tz = tz or ZoneInfo("UTC")
    date_range = resolve_date_range(preset, now, tz, start_date, end_date)
    users = db.query(User).all()
    today = to_timezone(now, tz).date()

    return Dashboard(
        date_range=date_range,
        overview=get_overview(db),
        range=get_range_stats(db, date_range.start, date_range.end),
        profession_breakdown=get_profession_breakdown(users),
        age_breakdown=get_age_breakdown(users, today),
    )
