"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time
from decimal import Decimal

DEFAULT_SESSION_DAYS = 7
DEFAULT_LIST_LIMIT = 200

# Minimum hours away on a first/last/same day before the partial rate applies.
MIN_PARTIAL_DAY_HOURS = Decimal("8")
FULL_DAY_HOURS = Decimal("24")
# A first day is counted up to this wall-clock time, not to midnight.
END_OF_DAY_TIME = time(23, 59, 59, 999000)

# 0 = Monday (date.weekday())
WEEK_START_DAY = 0

# Allowed mileage rates for private car expenses (per km).
CAR_RATES_PER_KM = (Decimal("0.7"), Decimal("0.5"), Decimal("0.3"))

MIN_VAT_RATE = Decimal("0")
MAX_VAT_RATE = Decimal("100")

# Project time is booked in man-days; one calendar day holds at most one.
MAX_MAN_DAYS_PER_DAY = Decimal("1")

MIN_PASSWORD_LENGTH = 6
