"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_MAX_PERIOD_MINUTES = 180
MIN_SEMESTER = 1
MAX_SEMESTER = 8
CLOCK_FORMATS = ("%I:%M %p", "%I:%M%p", "%H:%M", "%H:%M:%S")
TIME_SLOT_SEPARATOR = " - "
