"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_M = 6_371_000.0

DEFAULT_RADIUS_METERS = 50.0
DEFAULT_TIME_LIMIT_MINUTES = 30

# Location sampling (browser-style geolocation options)
DEFAULT_LOCATION_TIMEOUT_MS = 10_000
DEFAULT_ACQUIRE_DEADLINE_S = 30.0
DEFAULT_RETRY_INTERVAL_S = 1.0

DEFAULT_HISTORY_LIMIT = 200
