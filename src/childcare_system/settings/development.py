import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True

# memory | mysql
STORE_BACKEND = os.getenv("STORE_BACKEND", "memory")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "childcare_db"),
}

STORAGE_ROOT = os.getenv("STORAGE_ROOT", "var/storage")
STORAGE_BASE_URL = os.getenv("STORAGE_BASE_URL", "/files")

MAX_WRITE_WORKERS = int(os.getenv("MAX_WRITE_WORKERS", "4"))
DEFAULT_VACATION_DAYS = int(os.getenv("DEFAULT_VACATION_DAYS", "7"))

ROSTER_IDLE_SECONDS = int(os.getenv("ROSTER_IDLE_SECONDS", str(7 * 24 * 3600)))
MAX_ROSTER_SESSIONS = int(os.getenv("MAX_ROSTER_SESSIONS", "1000"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo accounts and children on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))
