"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6_371_000

DEFAULT_LATE_AFTER_HOUR = 9
DEFAULT_POSITION_TIMEOUT_SECONDS = 10
DEFAULT_SYNC_TIMEOUT_SECONDS = 30
DEFAULT_HISTORY_LIMIT = 30
MAX_HISTORY_LIMIT = 366
RECENT_ACTIVITY_LIMIT = 10
DEFAULT_SYNC_PROVIDER_DOMAIN = "script.google.com"

REMOTE_LOCATION = "Remote (WFH)"
LOCATION_UNAVAILABLE = "Location unavailable"
POSITION_TIMEOUT_ERROR = "TIMEOUT"

RECENT_RECORDS_FOR_INSIGHTS = 20

EMPLOYEE_EMAIL_DOMAIN = "@mycoharvest.in"
DEFAULT_OFFICE_RADIUS_METERS = 500
