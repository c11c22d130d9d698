"""Waiver schemas."""
from enum import Enum
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from volunteerhub.schemas.common import UTCDatetime


class WaiverState(str, Enum):
    NO_WAIVER = "no_waiver"
    ADULT_WAIVER_PENDING = "adult_waiver_pending"
    MINOR_WAIVER_PENDING = "minor_waiver_pending"
    WAIVER_COMPLETE = "waiver_complete"


class InPersonCompletion(BaseModel):
    """Signed at the desk: by the adult, or by a guardian who is present."""
    method: Literal["in_person"] = "in_person"
    signer_name: str = Field(..., min_length=1, max_length=100)
    acknowledged: bool
    guardian_name: Optional[str] = Field(None, max_length=100)


class RemoteGuardianCompletion(BaseModel):
    """Signed by a guardian through an emailed link."""
    method: Literal["remote_guardian"] = "remote_guardian"
    token: str
    signature: str = Field(..., min_length=1, max_length=100)


class WaiverStatusResponse(BaseModel):
    user_id: int
    state: WaiverState


class WaiverRequestCreate(BaseModel):
    user_id: int
    parent_email: EmailStr


class WaiverRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    parent_email: str
    volunteer_name: str
    status: str
    expires_at: UTCDatetime
    signed_at: Optional[UTCDatetime] = None


class WaiverRequestCreated(BaseModel):
    request: WaiverRequestResponse
    waiver_link: str
    email_sent: bool


class PublicWaiverView(BaseModel):
    """What the public signing page renders for a token."""
    status: Literal["pending", "expired"]
    volunteer_name: Optional[str] = None
    expires_at: Optional[UTCDatetime] = None


class WaiverSignRequest(BaseModel):
    signature: str = Field(..., min_length=1, max_length=100)
