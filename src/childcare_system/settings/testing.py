import os

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

STORE_BACKEND = "memory"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "childcare_test"),
}

STORAGE_ROOT = os.getenv("STORAGE_ROOT", "var/test-storage")
STORAGE_BASE_URL = "/files"

MAX_WRITE_WORKERS = 2
DEFAULT_VACATION_DAYS = 7

ROSTER_IDLE_SECONDS = 3600
MAX_ROSTER_SESSIONS = 100

AUTO_INIT_DB = False
AUTO_SEED_DB = False
