import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "geo_attendance"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEFAULT_RADIUS_METERS = float(os.getenv("DEFAULT_RADIUS_METERS", "50"))
DEFAULT_TIME_LIMIT_MINUTES = int(os.getenv("DEFAULT_TIME_LIMIT_MINUTES", "30"))

LOCATION_TIMEOUT_MS = int(os.getenv("LOCATION_TIMEOUT_MS", "10000"))
LOCATION_HIGH_ACCURACY = bool(int(os.getenv("LOCATION_HIGH_ACCURACY", "1")))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
