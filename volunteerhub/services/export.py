"""Filtered CSV export of user records."""
import csv
import io
from datetime import date, datetime
from typing import Dict, List, Optional
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from volunteerhub.core.constants import UNSPECIFIED_PROFESSION
from volunteerhub.core.logging_config import get_logger
from volunteerhub.core.utils import calculate_age, slugify_label, to_timezone, to_utc, utcnow
from volunteerhub.db.models import User
from volunteerhub.schemas.export import ExportFilters, ExportResult
from volunteerhub.services.analytics import get_hours_by_user, resolve_date_range

logger = get_logger(__name__)

EXPORT_COLUMNS = [
    "Name",
    "Email",
    "Phone",
    "Age",
    "City",
    "Organization",
    "Profession",
    "Hours in Period",
    "Total Lifetime Hours",
    "Total Bags Donated",
    "Status",
    "Registered",
]


def _outside(value, low, high) -> bool:
    return (low is not None and value < low) or (high is not None and value > high)


def apply_export_filters(
    users: List[User],
    filters: ExportFilters,
    hours_in_range: Dict[int, float],
    today: date,
) -> List[User]:
    """
    Keep users matching every set filter.

    Users without a birth date are dropped by any age filter. The hours
    filters look at hours inside the export's date window.
    """
    kept = []
    for user in users:
        if filters.profession and (user.profession or "") != filters.profession:
            continue

        if filters.min_age is not None or filters.max_age is not None:
            if user.date_of_birth is None:
                continue
            if _outside(calculate_age(user.date_of_birth, today), filters.min_age, filters.max_age):
                continue

        if _outside(hours_in_range.get(user.id, 0.0), filters.min_hours, filters.max_hours):
            continue
        if _outside(user.total_bags or 0, filters.min_bags, filters.max_bags):
            continue
        kept.append(user)
    return kept


def _row(user: User, hours: float, today: date, tz: ZoneInfo) -> list:
    age = calculate_age(user.date_of_birth, today) if user.date_of_birth else "Not specified"
    return [
        user.name,
        user.email,
        user.phone,
        age,
        user.city,
        user.organization,
        user.profession or UNSPECIFIED_PROFESSION,
        hours,
        user.total_hours or 0,
        user.total_bags or 0,
        "Active" if user.is_checked_in else "Offline",
        to_timezone(user.created_at, tz).strftime("%m/%d/%Y"),
    ]


def build_export(
    db: Session,
    filters: ExportFilters,
    now: Optional[datetime] = None,
    tz: Optional[ZoneInfo] = None,
) -> ExportResult:
    """
    Render matching users as CSV.

    A row that cannot be rendered is logged and counted in ``failed``; the
    rest of the export still goes out.
    """
    now = to_utc(now or utcnow())
    tz = tz or ZoneInfo("UTC")
    today = to_timezone(now, tz).date()
    date_range = resolve_date_range(filters.date_range, now, tz)

    users = db.query(User).order_by(User.name, User.id).all()
    if date_range.start is None and date_range.end is None:
        hours_in_range = {user.id: float(user.total_hours or 0.0) for user in users}
    else:
        hours_in_range = get_hours_by_user(db, date_range.start, date_range.end)

    selected = apply_export_filters(users, filters, hours_in_range, today)

    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_COLUMNS)
    exported = 0
    failed = 0
    for user in selected:
        try:
            row = _row(user, hours_in_range.get(user.id, 0.0), today, tz)
        except (TypeError, ValueError, AttributeError) as e:
            logger.error("export_row_failed", user_id=user.id, error=str(e))
            failed += 1
            continue
        writer.writerow(row)
        exported += 1

    range_slug = "all-time" if filters.date_range == "all_time" else slugify_label(date_range.label)
    filename = f"volunteer-data-{range_slug}-{today.isoformat()}.csv"
    logger.info("export_built", exported=exported, failed=failed, date_range=filters.date_range)
    return ExportResult(filename=filename, content=buffer.getvalue(), exported=exported, failed=failed)
