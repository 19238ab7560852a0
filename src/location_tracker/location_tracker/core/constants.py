"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PASSWORD = "12345"
DEVICE_ID_PREFIX = "DEVICE_"

DEFAULT_SPEED = 0.0
DEFAULT_ACCURACY = 0.0
DEFAULT_BATTERY = 100.0

DEFAULT_SEARCH_LIMIT = 100
DEFAULT_ACTIVITY_LIMIT = 50
