"""Donation model."""
from datetime import datetime, timezone as tz
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer
from sqlalchemy.orm import relationship

from volunteerhub.db.base import Base


class Donation(Base):
    __tablename__ = "donations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    bag_count = Column(Integer, nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    user = relationship("User", back_populates="donations")

    __table_args__ = (
        CheckConstraint("bag_count > 0", name="ck_donations_positive_bags"),
        Index("idx_donations_user", "user_id"),
        Index("idx_donations_timestamp", "timestamp"),
    )
