"""Audit trail of staff changes to volunteer hours."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from volunteerhub.db.base import Base


class HourAdjustment(Base):
    __tablename__ = "hour_adjustments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Not a foreign key: the session may have been deleted by this very adjustment
    session_id = Column(Integer, nullable=True)
    old_hours = Column(Float, nullable=False)
    new_hours = Column(Float, nullable=False)
    reason = Column(String(500), nullable=True)
    adjusted_by = Column(String(100), nullable=False)
    adjusted_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    user = relationship("User", back_populates="hour_adjustments")
