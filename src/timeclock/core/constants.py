"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_HOURLY_RATE = Decimal("15.00")
OVERTIME_MULTIPLIER = Decimal("1.5")
WEEKLY_OVERTIME_THRESHOLD_MINUTES = 40 * 60

DEFAULT_HISTORY_DAYS = 31
DEFAULT_EXPECTED_CLOCK_IN = "08:00"
DEFAULT_EXPECTED_CLOCK_OUT = "17:00"

ANOMALY_INVALID_OUTPUT = "Error: AI output format is invalid."
ANOMALY_MISSING_OUTPUT = "Error: AI analysis failed to produce a valid output structure."
ANOMALY_EXCEPTION_PREFIX = "Error: An exception occurred during AI analysis."

# Clock-ins after this time (to the minute) count as late on the daily board.
DEFAULT_LATE_AFTER = "09:15"

# Column sizes in schema.sql
NAME_MAX_LENGTH = 120
EMAIL_MAX_LENGTH = 190
RFID_TAG_MAX_LENGTH = 64
DEPARTMENT_MAX_LENGTH = 100
POSITION_MAX_LENGTH = 100
HOURLY_RATE_MAX = Decimal("99999999.99")
