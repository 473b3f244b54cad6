"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
MONTH_FORMAT = "%Y-%m"

UNSPECIFIED_LOCATION = "unspecified"

MAX_NAME_LENGTH = 100
MAX_AMOUNT = 100000

HOURS_DECIMALS = 2
