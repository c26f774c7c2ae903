"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_SHIFT_START = time(9, 0)
DEFAULT_GRACE_END = time(9, 10)
DEFAULT_LATE_END = time(9, 30)
DEFAULT_HALF_DAY_CUTOFF = time(10, 0)
DEFAULT_SHIFT_END = time(19, 0)
DEFAULT_FULL_DAY_HOURS = 9.0
DEFAULT_HALF_DAY_HOURS = 5.0

ZERO_DURATION = "00:00:00"

DEFAULT_BACKFILL_DAYS = 30
DEFAULT_SWEEP_HOUR = 10
DEFAULT_SWEEP_MINUTE = 30
DEFAULT_OVERDUE_CHECK_MINUTES = 30
DEFAULT_STARTUP_DELAY_SECONDS = 10
DEFAULT_MISFIRE_GRACE_SECONDS = 15 * 60

AUTO_ABSENT_NOTE = "Auto-marked absent (no attendance recorded)"
AUTO_BACKFILL_NOTE = "Auto-marked absent (backfill, no attendance recorded)"
MANUAL_ABSENT_NOTE = "Marked absent by admin"

PLACEHOLDER_PREFIX = "absent"
