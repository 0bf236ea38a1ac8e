"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_VACATION_DAYS = 7
MIN_VACATION_DAYS = 1
MAX_VACATION_DAYS = 30
DEFAULT_MAX_WRITE_WORKERS = 4
PIN_LENGTH = 4

# Roster sessions: idle expiry matches the remembered-login lifetime
DEFAULT_ROSTER_IDLE_SECONDS = 7 * 24 * 3600
DEFAULT_MAX_ROSTER_SESSIONS = 1000

# Document store collections
CHILDREN = "children"
ABSENCES = "absences"
GUEST_LINKS = "guestLinks"
COMMENTS = "comments"
EVENTS = "events"
DEPARTMENTS = "departments"
GUARDIANS = "parents"
STAFF = "employees"
ACCOUNTS = "accounts"
