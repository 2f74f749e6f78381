"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

EARTH_RADIUS_METERS = 6_371_000.0

MAX_ACCURACY_METERS = 100
SPOOF_MAX_ACCURACY_METERS = 5
SPOOF_EDGE_TOLERANCE_METERS = 10
SUSPECTED_MOCK_NOTE = "suspected_mock_location"

DEFAULT_WORK_START = time(8, 0)
DEFAULT_WORK_END = time(17, 0)
DEFAULT_STANDARD_WORK_HOURS = 8
DEFAULT_GEOFENCE_RADIUS_METERS = 100

DEFAULT_HISTORY_DAYS = 30
DEFAULT_AUDIT_LIMIT = 100
MAX_AUDIT_LIMIT = 500

# Python weekday(): Monday=0 ... Sunday=6
WORKING_WEEKDAYS = frozenset({0, 1, 2, 3, 4})
