"""User (volunteer / donor) model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Boolean, Column, Date, DateTime, Float, Index, Integer, String
from sqlalchemy.orm import relationship

from volunteerhub.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(254), nullable=False, index=True)
    phone = Column(String(20), nullable=False)
    city = Column(String(200), nullable=False, default="")
    organization = Column(String(200), nullable=False, default="")
    profession = Column(String(200), nullable=False, default="")
    date_of_birth = Column(Date, nullable=True)
    is_minor = Column(Boolean, nullable=False, default=False)
    parent_guardian_name = Column(String(100), nullable=True)
    allow_communication = Column(Boolean, nullable=False, default=False)

    waiver_signed = Column(Boolean, nullable=False, default=False)
    waiver_signed_at = Column(DateTime(timezone=True), nullable=True)
    waiver_method = Column(String(20), nullable=True)  # in_person | remote_guardian

    # Materialized from volunteer_sessions / donations; recomputed on every write
    total_hours = Column(Float, nullable=False, default=0.0)
    total_bags = Column(Integer, nullable=False, default=0)

    is_checked_in = Column(Boolean, nullable=False, default=False)
    last_check_in = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    sessions = relationship("VolunteerSession", back_populates="user", cascade="all, delete-orphan")
    donations = relationship("Donation", back_populates="user", cascade="all, delete-orphan")
    waiver_requests = relationship("WaiverRequest", back_populates="user", cascade="all, delete-orphan")
    hour_adjustments = relationship("HourAdjustment", back_populates="user", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_users_checked_in", "is_checked_in"),
    )
