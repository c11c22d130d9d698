"""Donation schemas."""
from pydantic import BaseModel, ConfigDict, Field

from volunteerhub.schemas.common import UTCDatetime


class DonationCreate(BaseModel):
    user_id: int
    bag_count: int = Field(..., gt=0, le=1000)


class DonationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    bag_count: int
    timestamp: UTCDatetime
