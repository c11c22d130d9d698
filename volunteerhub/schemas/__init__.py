"""Pydantic schemas for request/response validation."""
from volunteerhub.schemas.auth import (
    StaffLoginRequest,
    StaffIdentity,
    PasswordChangeRequest,
    StaffAccountCreate,
    StaffAccountCreated,
)
from volunteerhub.schemas.user import (
    UserCreate,
    RegistrationRequest,
    UserUpdate,
    UserResponse,
    ActiveVolunteer,
)
from volunteerhub.schemas.session import (
    ClosedSession,
    ActiveSession,
    SessionEntry,
    SessionUpdate,
    ActiveSessionUpdate,
    HoursRecalculated,
)
from volunteerhub.schemas.donation import DonationCreate, DonationResponse
from volunteerhub.schemas.analytics import DateRange, Overview, RangeStats, DailyTotals, Dashboard
from volunteerhub.schemas.settings import DaySchedule, AutoCheckoutSettings, AutoCheckoutResult
from volunteerhub.schemas.waiver import (
    WaiverState,
    InPersonCompletion,
    RemoteGuardianCompletion,
    WaiverStatusResponse,
    WaiverRequestCreate,
    WaiverRequestResponse,
    WaiverRequestCreated,
    PublicWaiverView,
    WaiverSignRequest,
)
from volunteerhub.schemas.export import ExportFilters, ExportResult
from volunteerhub.schemas.common import SuccessResponse, ErrorResponse, ErrorDetail

__all__ = [
    "StaffLoginRequest",
    "StaffIdentity",
    "PasswordChangeRequest",
    "StaffAccountCreate",
    "StaffAccountCreated",
    "UserCreate",
    "RegistrationRequest",
    "UserUpdate",
    "UserResponse",
    "ActiveVolunteer",
    "ClosedSession",
    "ActiveSession",
    "SessionEntry",
    "SessionUpdate",
    "ActiveSessionUpdate",
    "HoursRecalculated",
    "DonationCreate",
    "DonationResponse",
    "DateRange",
    "Overview",
    "RangeStats",
    "DailyTotals",
    "Dashboard",
    "DaySchedule",
    "AutoCheckoutSettings",
    "AutoCheckoutResult",
    "WaiverState",
    "InPersonCompletion",
    "RemoteGuardianCompletion",
    "WaiverStatusResponse",
    "WaiverRequestCreate",
    "WaiverRequestResponse",
    "WaiverRequestCreated",
    "PublicWaiverView",
    "WaiverSignRequest",
    "ExportFilters",
    "ExportResult",
    "SuccessResponse",
    "ErrorResponse",
    "ErrorDetail",
]
