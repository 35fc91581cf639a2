"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_HISTORY_LIMIT = 500
MAX_PLAN_DURATION_MONTHS = 120
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

# Money columns are DECIMAL(10, 2).
MONEY_DECIMAL_PLACES = 2
MONEY_UPPER_BOUND = 10 ** 8
