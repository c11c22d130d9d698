"""Database models."""
from volunteerhub.db.models.user import User
from volunteerhub.db.models.volunteer_session import VolunteerSession
from volunteerhub.db.models.donation import Donation
from volunteerhub.db.models.waiver_request import WaiverRequest
from volunteerhub.db.models.system_setting import SystemSetting
from volunteerhub.db.models.staff_profile import StaffProfile
from volunteerhub.db.models.hour_adjustment import HourAdjustment

__all__ = [
    "User",
    "VolunteerSession",
    "Donation",
    "WaiverRequest",
    "SystemSetting",
    "StaffProfile",
    "HourAdjustment",
]
