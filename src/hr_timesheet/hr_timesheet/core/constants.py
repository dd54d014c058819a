"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6_371_000.0
DEFAULT_GEOFENCE_RADIUS_METERS = 100.0

HOURS_PRECISION = 2
SECONDS_PER_HOUR = 3600

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_STATISTICS_MONTHS = 6
ATTENDANCE_EXPORT_LIMIT = 1000

MIN_PASSWORD_LENGTH = 6
REQUEST_LIST_LIMIT = 200
