"""Factories shared by the tests."""
from datetime import date, datetime, timezone

from volunteerhub.core.security import get_password_hash
from volunteerhub.db.models import StaffProfile, User, VolunteerSession

STAFF_PASSWORD = "correct-horse-battery"


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def make_user(db, **overrides) -> User:
    fields = {
        "name": "Jordan Rivera",
        "email": "jordan@example.org",
        "phone": "555-123-4567",
        "city": "Springfield",
        "organization": "Food Bank",
        "profession": "Teacher",
        "date_of_birth": date(1990, 6, 15),
        "is_minor": False,
        "waiver_signed": True,
        "waiver_method": "in_person",
        "total_hours": 0.0,
        "total_bags": 0,
        "is_checked_in": False,
        "created_at": utc(2024, 1, 1, 12, 0),
    }
    fields.update(overrides)
    user = User(**fields)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_session(db, user, check_in_time, check_out_time, hours_worked, notes=None) -> VolunteerSession:
    record = VolunteerSession(
        user_id=user.id,
        check_in_time=check_in_time,
        check_out_time=check_out_time,
        hours_worked=hours_worked,
        notes=notes,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def make_staff(db, **overrides) -> StaffProfile:
    fields = {
        "email": "coordinator@example.org",
        "username": "coordinator",
        "display_name": "Casey Coordinator",
        "role": "admin",
        "password_hash": get_password_hash(STAFF_PASSWORD),
        "first_login": True,
    }
    fields.update(overrides)
    profile = StaffProfile(**fields)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile
