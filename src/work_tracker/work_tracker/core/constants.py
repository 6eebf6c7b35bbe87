"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6_371_000
DEFAULT_MAX_CHECKOUT_METERS = 100
DEFAULT_ADMIN_USERNAMES = ("bamboo",)
DEFAULT_HISTORY_LIMIT = 5
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"

# Fixed keys of the key-value substrate.
USER_KEY = "wt_user"
LOGS_KEY = "wt_logs"
DEVICE_ID_KEY = "wt_device_id"
