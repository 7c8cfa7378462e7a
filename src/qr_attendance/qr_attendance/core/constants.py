"""Routes, session key and scanning defaults."""
from datetime import time

SESSION_KEY = "currentUser"

AUTH_ENTRY_ROUTE = "/auth"
ROOT_ROUTE = "/"
ADMIN_HOME_ROUTE = "/admin/dashboard"
FACULTY_HOME_ROUTE = "/faculty/dashboard"
SBO_HOME_ROUTE = "/sbo/home"
STUDENT_HOME_ROUTE = "/student/dashboard"

DEFAULT_DISPLAY_NAME = "User"

# Scanning windows (local time, inclusive bounds)
TIME_IN_START = time(7, 0)
TIME_IN_END = time(11, 30, 59)
TIME_OUT_START = time(13, 0)
TIME_OUT_END = time(16, 59, 59)

RECENT_HISTORY_DAYS = 7
RECENT_HISTORY_LIMIT = 5
DEFAULT_RECORDS_LIMIT = 200
