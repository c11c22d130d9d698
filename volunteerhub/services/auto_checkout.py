"""End-of-day auto-checkout.

Nothing in here runs on its own: an external scheduler calls
``run_scheduled_auto_checkout`` (see scripts/auto_checkout.py), which decides
from the stored office-hours schedule whether it is time to close everyone
out. Running it again afterwards finds nobody checked in and does nothing.
"""
import json
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from volunteerhub.core.constants import AUTO_CHECKOUT_REASON, AUTO_CHECKOUT_SETTINGS_KEY
from volunteerhub.core.logging_config import get_logger
from volunteerhub.core.utils import day_name, time_of_day, to_timezone, to_utc, utcnow
from volunteerhub.db.models import SystemSetting
from volunteerhub.schemas.settings import AutoCheckoutResult, AutoCheckoutSettings
from volunteerhub.schemas.user import UserResponse
from volunteerhub.services.accounting import force_check_out
from volunteerhub.services.registry import get_active_users

logger = get_logger(__name__)


def get_auto_checkout_settings(db: Session) -> AutoCheckoutSettings:
    """Stored settings, or the defaults if none were saved or they are unreadable."""
    row = db.query(SystemSetting).filter(SystemSetting.key == AUTO_CHECKOUT_SETTINGS_KEY).first()
    if row is None:
        return AutoCheckoutSettings()

    try:
        return AutoCheckoutSettings.model_validate(json.loads(row.value))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning("auto_checkout_settings_invalid", error=str(e))
        return AutoCheckoutSettings()


def update_auto_checkout_settings(
    db: Session,
    new_settings: AutoCheckoutSettings,
    now: Optional[datetime] = None,
) -> AutoCheckoutSettings:
    now = to_utc(now or utcnow())
    value = new_settings.model_dump_json()

    try:
        row = db.query(SystemSetting).filter(SystemSetting.key == AUTO_CHECKOUT_SETTINGS_KEY).first()
        if row is None:
            db.add(SystemSetting(key=AUTO_CHECKOUT_SETTINGS_KEY, value=value, updated_at=now))
        else:
            row.value = value
            row.updated_at = now
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info("auto_checkout_settings_updated", enabled=new_settings.enabled, timezone=new_settings.timezone)
    return new_settings


def _skip_reason(settings: AutoCheckoutSettings, now: datetime) -> Optional[str]:
    if not settings.enabled:
        return "disabled"

    local = to_timezone(now, ZoneInfo(settings.timezone))
    day = day_name(local)
    schedule = settings.schedule.get(day)
    if schedule is None or not schedule.enabled:
        return f"not enabled for {day}"

    # Zero-padded HH:MM strings compare in time order
    if time_of_day(local) < schedule.end_time:
        return "too early"
    return None


def should_run(settings: AutoCheckoutSettings, now: datetime) -> bool:
    """True once the local time has reached the day's end_time on an enabled day."""
    return _skip_reason(settings, now) is None


def run_auto_checkout(
    db: Session,
    reason: str = AUTO_CHECKOUT_REASON,
    now: Optional[datetime] = None,
) -> AutoCheckoutResult:
    """
    Force-check-out everyone currently checked in.

    One user's failure is rolled back and reported without stopping the rest.
    """
    now = to_utc(now or utcnow())
    active_ids = [user.id for user in get_active_users(db)]
    if not active_ids:
        return AutoCheckoutResult(ran=True, message="No active volunteers to check out")

    checked_out = []
    failed = []
    for user_id in active_ids:
        try:
            user = force_check_out(db, user_id, reason, now)
        except (SQLAlchemyError, ValueError) as e:
            db.rollback()
            logger.error("auto_checkout_user_failed", user_id=user_id, error=str(e))
            failed.append(user_id)
            continue
        if user is not None:
            checked_out.append(UserResponse.model_validate(user))

    message = f"Checked out {len(checked_out)} volunteer(s)"
    if failed:
        message += f", {len(failed)} failed"
    logger.info("auto_checkout_completed", checked_out=len(checked_out), failed=len(failed), reason=reason)
    return AutoCheckoutResult(ran=True, message=message, checked_out=checked_out, failed_user_ids=failed)


def run_scheduled_auto_checkout(db: Session, now: Optional[datetime] = None) -> AutoCheckoutResult:
    """Entry point for the external trigger; checks the schedule first."""
    now = to_utc(now or utcnow())
    settings = get_auto_checkout_settings(db)

    reason = _skip_reason(settings, now)
    if reason is not None:
        logger.info("auto_checkout_skipped", reason=reason)
        return AutoCheckoutResult(ran=False, message=f"Skipped: {reason}")

    return run_auto_checkout(db, AUTO_CHECKOUT_REASON, now)
