import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_attendance"),
}

MONGO_CONFIG = {
    "uri": os.getenv("MONGO_URI", "mongodb://localhost:27017"),
    "database": os.getenv("MONGO_DB", "school_attendance"),
}

# Same-day attendance: one Redis logical database per education level.
REDIS_CONFIG = {
    "host": os.getenv("REDIS_HOST", "localhost"),
    "port": int(os.getenv("REDIS_PORT", "6379")),
    "password": os.getenv("REDIS_PASSWORD") or None,
    "primary_db": int(os.getenv("REDIS_PRIMARY_DB", "0")),
    "secondary_db": int(os.getenv("REDIS_SECONDARY_DB", "1")),
}

ROSTER_DIR = os.getenv("ROSTER_DIR", "var/roster")
REPORTS_DIR = os.getenv("REPORTS_DIR", "var/reports")
LIVE_FETCH_WORKERS = int(os.getenv("LIVE_FETCH_WORKERS", "8"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
