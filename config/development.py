import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "geo_attendance"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Session defaults used when the operator leaves a field blank
DEFAULT_RADIUS_METERS = float(os.getenv("DEFAULT_RADIUS_METERS", "50"))
DEFAULT_TIME_LIMIT_MINUTES = int(os.getenv("DEFAULT_TIME_LIMIT_MINUTES", "30"))

# Client location sampling
LOCATION_TIMEOUT_MS = int(os.getenv("LOCATION_TIMEOUT_MS", "10000"))
LOCATION_HIGH_ACCURACY = bool(int(os.getenv("LOCATION_HIGH_ACCURACY", "1")))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo cohort on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
