SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORAGE_BACKEND = "memory"
STORAGE_PATH = ""

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "work_tracker_test",
}

AUTO_INIT_DB = False

ADMIN_USERNAMES = ("bamboo",)
MAX_CHECKOUT_DISTANCE_METERS = 100.0
ENFORCE_CHECKOUT_PROXIMITY = True
TIMEZONE = "Asia/Bangkok"

GEMINI_API_KEY = None
GEMINI_MODEL = "gemini-2.5-flash"
