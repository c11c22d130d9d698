"""Volunteer session schemas.

A user's session history mixes stored (closed) intervals with the one that
is still running. The running one only exists on the User row, so it is a
separate variant without an id rather than a fake row.
"""
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

from volunteerhub.schemas.common import UTCDatetime


class ClosedSession(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    kind: Literal["closed"] = "closed"
    id: int
    user_id: int
    check_in_time: UTCDatetime
    check_out_time: UTCDatetime
    hours_worked: float
    notes: Optional[str] = None


class ActiveSession(BaseModel):
    kind: Literal["active"] = "active"
    user_id: int
    check_in_time: UTCDatetime
    elapsed_hours: float


SessionEntry = Annotated[Union[ClosedSession, ActiveSession], Field(discriminator="kind")]


class SessionUpdate(BaseModel):
    check_in_time: UTCDatetime
    check_out_time: UTCDatetime
    notes: Optional[str] = Field(None, max_length=500)
    reason: Optional[str] = Field(None, max_length=500)


class ActiveSessionUpdate(BaseModel):
    check_in_time: UTCDatetime


class HoursRecalculated(BaseModel):
    user_id: int
    total_hours: float
