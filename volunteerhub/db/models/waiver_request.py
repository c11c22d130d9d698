"""Remote guardian waiver request model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from volunteerhub.db.base import Base


class WaiverRequest(Base):
    __tablename__ = "waiver_requests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    token = Column(String(64), unique=True, nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    parent_email = Column(String(254), nullable=False)
    volunteer_name = Column(String(100), nullable=False)
    status = Column(String(20), nullable=False, default="pending")  # pending | signed
    parent_signature = Column(String(100), nullable=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    signed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    user = relationship("User", back_populates="waiver_requests")
