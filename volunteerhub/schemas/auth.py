"""Staff authentication schemas."""
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field


StaffRole = Literal["admin", "staff"]


class StaffLoginRequest(BaseModel):
    identifier: str = Field(..., min_length=1, max_length=254)  # email or username
    password: str = Field(..., min_length=1)


class StaffIdentity(BaseModel):
    """
    The acting staff member.

    Built at login and from the JWT on every authenticated request, then
    passed explicitly to services that record who did what.
    """
    model_config = ConfigDict(frozen=True)

    id: int
    display_name: str
    email: str
    role: StaffRole
    requires_password_change: bool = False


class PasswordChangeRequest(BaseModel):
    new_password: str = Field(..., min_length=8, max_length=128)


class StaffAccountCreate(BaseModel):
    email: EmailStr
    display_name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")
    role: StaffRole = "staff"


class StaffAccountCreated(BaseModel):
    id: int
    email: str
    username: str
    role: StaffRole
    invite_sent: bool
    message: Optional[str] = None
