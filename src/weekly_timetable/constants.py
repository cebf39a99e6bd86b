"""Constants for the weekly timetable grid."""

# Working days, in display order
DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]

# Periods are numbered from 1
MIN_PERIOD = 1
MAX_PERIOD = 5
PERIODS = list(range(MIN_PERIOD, MAX_PERIOD + 1))

DAYS_PER_WEEK = len(DAY_NAMES)

# Output key template for a period ("Period 1")
PERIOD_KEY_TEMPLATE = "Period {}"

# Day abbreviations accepted by the configuration loader
DAY_ABBREVIATIONS = {
    "mon": 0,
    "tue": 1,
    "wed": 2,
    "thu": 3,
    "fri": 4,
}
