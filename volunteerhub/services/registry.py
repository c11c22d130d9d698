"""Who is in the building right now."""
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from volunteerhub.core.utils import format_elapsed, to_utc, utcnow
from volunteerhub.db.models import User
from volunteerhub.schemas.user import ActiveVolunteer


def get_active_users(db: Session) -> List[User]:
    """Checked-in users, longest-running first."""
    return db.query(User).filter(
        User.is_checked_in.is_(True),
        User.last_check_in.isnot(None),
    ).order_by(User.last_check_in.asc(), User.id.asc()).all()


def list_active_volunteers(db: Session, now: Optional[datetime] = None) -> List[ActiveVolunteer]:
    now = to_utc(now or utcnow())
    volunteers = []
    for user in get_active_users(db):
        minutes = int((now - to_utc(user.last_check_in)).total_seconds() // 60)
        volunteers.append(ActiveVolunteer(
            user_id=user.id,
            name=user.name,
            organization=user.organization,
            last_check_in=user.last_check_in,
            elapsed_minutes=max(minutes, 0),
            elapsed_display=format_elapsed(minutes),
        ))
    return volunteers

