"""Key/value system settings model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, DateTime, Integer, String, Text

from volunteerhub.db.base import Base


class SystemSetting(Base):
    __tablename__ = "system_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String(100), unique=True, nullable=False, index=True)
    value = Column(Text, nullable=False)  # JSON document
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))
