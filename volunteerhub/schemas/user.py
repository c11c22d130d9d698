"""User schemas."""
from datetime import date
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, computed_field

from volunteerhub.core.utils import calculate_age
from volunteerhub.schemas.common import UTCDatetime


class UserCreate(BaseModel):
    """Staff-entered user record."""
    name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=254)
    phone: str = Field(..., max_length=20)
    city: Optional[str] = Field(None, max_length=200)
    organization: Optional[str] = Field(None, max_length=200)
    profession: Optional[str] = Field(None, max_length=200)
    date_of_birth: Optional[date] = None
    parent_guardian_name: Optional[str] = Field(None, max_length=100)
    allow_communication: bool = False


class RegistrationRequest(UserCreate):
    """
    Self-service registration from the kiosk or the public site.

    ``waiver_accepted`` is the adult's own waiver checkbox, or for a minor the
    guardian's acknowledgement that the formal waiver is confirmed in person.
    ``mode`` is "walk_up" when the guardian is at the desk right now and
    "remote" for pre-registration ahead of the first visit.
    """
    waiver_accepted: bool = False
    mode: Literal["walk_up", "remote"] = "walk_up"


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=254)
    phone: Optional[str] = Field(None, max_length=20)
    city: Optional[str] = Field(None, max_length=200)
    organization: Optional[str] = Field(None, max_length=200)
    profession: Optional[str] = Field(None, max_length=200)
    date_of_birth: Optional[date] = None
    parent_guardian_name: Optional[str] = Field(None, max_length=100)
    allow_communication: Optional[bool] = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: str
    city: str
    organization: str
    profession: str
    date_of_birth: Optional[date] = None
    is_minor: bool
    parent_guardian_name: Optional[str] = None
    allow_communication: bool
    waiver_signed: bool
    waiver_signed_at: Optional[UTCDatetime] = None
    waiver_method: Optional[str] = None
    total_hours: float
    total_bags: int
    is_checked_in: bool
    last_check_in: Optional[UTCDatetime] = None
    created_at: UTCDatetime

    @computed_field
    @property
    def age(self) -> Optional[int]:
        if self.date_of_birth is None:
            return None
        return calculate_age(self.date_of_birth, date.today())


class ActiveVolunteer(BaseModel):
    user_id: int
    name: str
    organization: str
    last_check_in: UTCDatetime
    elapsed_minutes: int
    elapsed_display: str
