"""Database base class and model imports."""
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Import all models here for Alembic to detect them
from volunteerhub.db.models.user import User  # noqa: F401, E402
from volunteerhub.db.models.volunteer_session import VolunteerSession  # noqa: F401, E402
from volunteerhub.db.models.donation import Donation  # noqa: F401, E402
from volunteerhub.db.models.waiver_request import WaiverRequest  # noqa: F401, E402
from volunteerhub.db.models.system_setting import SystemSetting  # noqa: F401, E402
from volunteerhub.db.models.staff_profile import StaffProfile  # noqa: F401, E402
from volunteerhub.db.models.hour_adjustment import HourAdjustment  # noqa: F401, E402
