"""Staff account model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Boolean, Column, DateTime, Integer, String

from volunteerhub.db.base import Base


class StaffProfile(Base):
    __tablename__ = "staff_profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(254), unique=True, nullable=False, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    display_name = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False, default="staff")  # admin | staff
    password_hash = Column(String(255), nullable=False)
    first_login = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))
