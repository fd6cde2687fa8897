"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_BUSINESS_START = "09:00"
DEFAULT_GRACE_MINUTES = 10
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200
DEFAULT_SESSION_DAYS = 7
# Larger offsets cannot match any stored row; MySQL rejects OFFSET beyond 2**64 - 1.
MAX_QUERY_OFFSET = 10**12
