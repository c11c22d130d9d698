"""Auto-checkout settings schemas."""
from typing import Dict, List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from pydantic import BaseModel, Field, field_validator, model_validator

from volunteerhub.core.constants import DEFAULT_TIMEZONE, WEEKDAYS
from volunteerhub.core.sanitization import validate_time_of_day
from volunteerhub.schemas.user import UserResponse


class DaySchedule(BaseModel):
    enabled: bool = False
    start_time: str = "09:00"
    end_time: str = "18:00"

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_field(cls, v: str) -> str:
        return validate_time_of_day(v)


def default_schedule() -> Dict[str, DaySchedule]:
    return {
        day: DaySchedule(enabled=day not in ("saturday", "sunday"))
        for day in WEEKDAYS
    }


class AutoCheckoutSettings(BaseModel):
    enabled: bool = True
    timezone: str = DEFAULT_TIMEZONE
    schedule: Dict[str, DaySchedule] = Field(default_factory=default_schedule)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {v}")
        return v

    @model_validator(mode="after")
    def fill_missing_days(self):
        unknown = set(self.schedule) - set(WEEKDAYS)
        if unknown:
            raise ValueError(f"Unknown schedule days: {', '.join(sorted(unknown))}")
        for day in WEEKDAYS:
            self.schedule.setdefault(day, DaySchedule())
        return self


class AutoCheckoutResult(BaseModel):
    ran: bool
    message: str
    checked_out: List[UserResponse] = Field(default_factory=list)
    failed_user_ids: List[int] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.checked_out)
