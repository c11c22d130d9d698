"""Bag donations and the users' bag totals."""
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from volunteerhub.core.exceptions import InvalidInputError, UserNotFoundError
from volunteerhub.core.logging_config import get_logger
from volunteerhub.core.utils import to_utc, utcnow
from volunteerhub.db.models import Donation, User

logger = get_logger(__name__)


def _sum_bags(db: Session, user_id: int) -> int:
    total = db.query(func.coalesce(func.sum(Donation.bag_count), 0)).filter(
        Donation.user_id == user_id
    ).scalar()
    return int(total or 0)


def add_donation(db: Session, user_id: int, bag_count: int, now: Optional[datetime] = None) -> Donation:
    """
    Record a donation and rebuild the donor's total_bags from their rows.

    Raises:
        InvalidInputError: bag_count is not a positive integer
        UserNotFoundError: unknown user
    """
    if not isinstance(bag_count, int) or isinstance(bag_count, bool) or bag_count <= 0:
        raise InvalidInputError("Bag count must be a positive whole number")

    now = to_utc(now or utcnow())
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise UserNotFoundError(user_id)

    donation = Donation(user_id=user_id, bag_count=bag_count, timestamp=now)
    try:
        db.add(donation)
        db.flush()
        user.total_bags = _sum_bags(db, user_id)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    db.refresh(donation)
    logger.info("donation_recorded", user_id=user_id, bag_count=bag_count, total_bags=user.total_bags)
    return donation


def list_user_donations(db: Session, user_id: int) -> List[Donation]:
    if not db.query(User.id).filter(User.id == user_id).first():
        raise UserNotFoundError(user_id)
    return db.query(Donation).filter(Donation.user_id == user_id).order_by(
        Donation.timestamp.desc(), Donation.id.desc()
    ).all()
