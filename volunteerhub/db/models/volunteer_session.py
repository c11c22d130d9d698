"""Volunteer session model (one closed check-in/check-out interval)."""
from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from volunteerhub.db.base import Base


class VolunteerSession(Base):
    __tablename__ = "volunteer_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    check_in_time = Column(DateTime(timezone=True), nullable=False)
    check_out_time = Column(DateTime(timezone=True), nullable=False)
    hours_worked = Column(Float, nullable=False)
    notes = Column(String(500), nullable=True)

    # Relationships
    user = relationship("User", back_populates="sessions")

    __table_args__ = (
        Index("idx_sessions_user", "user_id"),
        Index("idx_sessions_check_in", "check_in_time"),
    )
