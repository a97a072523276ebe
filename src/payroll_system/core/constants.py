"""Constants and policy defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Payroll proration uses a fixed month of 26 working days, not the calendar.
WORKING_DAYS_PER_MONTH = 26
DEFAULT_HOLD_PERCENT = 5
PAID_SICK_DAYS_PER_MONTH = 1

# Worked-hours thresholds when attendance status is derived from check-in/out.
FULL_DAY_HOURS = 8.25
HALF_DAY_HOURS = 4

DEFAULT_HISTORY_LIMIT = 60
