import os

from config import env_list

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# memory | json | mysql
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "json")
STORAGE_PATH = os.getenv("STORAGE_PATH", "instance/work_tracker.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "work_tracker"),
}

# If enabled (mysql backend only), app applies schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

ADMIN_USERNAMES = env_list("ADMIN_USERNAMES", "bamboo")
MAX_CHECKOUT_DISTANCE_METERS = float(os.getenv("MAX_CHECKOUT_DISTANCE_METERS", "100"))
ENFORCE_CHECKOUT_PROXIMITY = bool(int(os.getenv("ENFORCE_CHECKOUT_PROXIMITY", "1")))
TIMEZONE = os.getenv("TIMEZONE", "")

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
