"""Application constants.

Business-rule numbers shared by the services. Values that deployments may
want to tune (lockout policy, waiver expiry) are defaults for the matching
settings in volunteerhub.core.config.
"""

# Hour accounting
# Durations are billed in 15-minute increments
HOUR_INCREMENTS = 4

# Age
ADULT_AGE = 18
# (exclusive upper bound, label); anything past the last bound is "65+"
AGE_BUCKETS = (
    (25, "18-24"),
    (35, "25-34"),
    (45, "35-44"),
    (55, "45-54"),
    (65, "55-64"),
)
OLDEST_AGE_BUCKET = "65+"

# Breakdown bucket for users who left profession empty
UNSPECIFIED_PROFESSION = "Not specified"

# Staff login lockout
LOGIN_MAX_ATTEMPTS = 5
LOGIN_LOCKOUT_MINUTES = 15

# JWT Token Configuration (8 hours)
ACCESS_TOKEN_EXPIRE_MINUTES = 480
STAFF_COOKIE_NAME = "staff_token"

# Remote guardian waiver links
WAIVER_REQUEST_TTL_DAYS = 7

# Auto-checkout
AUTO_CHECKOUT_SETTINGS_KEY = "auto_checkout"
AUTO_CHECKOUT_REASON = "Auto-checkout: Office hours ended"
DEFAULT_TIMEZONE = "America/Chicago"
WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

# Users registered within this many days count as "recent"
RECENT_USER_DAYS = 7
