import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "geo_attendance_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

DEFAULT_RADIUS_METERS = 50.0
DEFAULT_TIME_LIMIT_MINUTES = 30

LOCATION_TIMEOUT_MS = 1000
LOCATION_HIGH_ACCURACY = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
