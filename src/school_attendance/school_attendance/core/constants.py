"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_LATE_TOLERANCE_MINUTES = 5
DEFAULT_LIVE_FETCH_WORKERS = 8

# Grades offered per education level (used when a report selects every grade).
PRIMARY_GRADES = (1, 2, 3, 4, 5, 6)
SECONDARY_GRADES = (1, 2, 3, 4, 5)

# "T" (todos) selects every grade/section in report parameters.
ALL_SELECTOR = "T"

# Live key grammar: {date}:{check_mode}:{actor}:{level}:{grade}:{section}:{student_id}
LIVE_KEY_SEPARATOR = ":"
LIVE_KEY_FIELD_COUNT = 7
LIVE_KEY_DATE_FORMAT = "%Y-%m-%d"
STUDENT_ACTOR_CODE = "E"

# Historical day detail field carrying the offset in seconds.
OFFSET_FIELD = "DesfaseSegundos"

REPORTS_FOLDER = "Reports"
