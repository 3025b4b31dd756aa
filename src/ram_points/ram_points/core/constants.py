"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_EVENT_POINTS = 2
DEFAULT_EMAIL_DOMAIN = "virginia.edu"
MIN_EVENT_POINTS = 1
MAX_SEARCH_RESULTS = 200
