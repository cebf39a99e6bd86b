"""Utility functions for the timetable generator."""

from .constants import DAY_ABBREVIATIONS, DAY_NAMES, MAX_PERIOD, PERIOD_KEY_TEMPLATE


def parse_day_index(value: str | int) -> int | None:
    """Convert a day name, abbreviation or index to a 0-based day index.

    Accepts "Wednesday", "wednesday", "Wed", "wed" and 2 alike.

    Args:
        value: Day name, three-letter abbreviation, or integer index

    Returns:
        Day index 0-4, or None if the value is not a working day
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if 0 <= value < len(DAY_NAMES) else None

    name = str(value).strip().lower()
    if not name:
        return None

    for index, day_name in enumerate(DAY_NAMES):
        if name == day_name.lower():
            return index

    return DAY_ABBREVIATIONS.get(name)


def period_key(period: int) -> str:
    """Get the output key for a period (e.g., 3 -> 'Period 3')."""
    return PERIOD_KEY_TEMPLATE.format(period)


def longest_run(periods: set[int] | list[int]) -> int:
    """Length of the longest run of contiguous period numbers.

    Args:
        periods: Period numbers occupied on one day

    Returns:
        Length of the longest contiguous run (0 for no periods)
    """
    best = 0
    current = 0
    previous = None
    for period in sorted(set(periods)):
        if previous is not None and period == previous + 1:
            current += 1
        else:
            current = 1
        best = max(best, current)
        previous = period
    return best


def run_through(periods: set[int], period: int) -> int:
    """Length of the contiguous run that would contain ``period``.

    ``period`` itself is counted whether or not it is already in ``periods``.
    """
    length = 1
    below = period - 1
    while below in periods:
        length += 1
        below -= 1
    above = period + 1
    while above in periods:
        length += 1
        above += 1
    return length


def max_daily_periods(max_hours_per_day: int, max_consecutive_hours: int) -> int:
    """Most periods a faculty member can teach in one day.

    With runs capped at ``c`` periods, every block of ``c + 1`` periods must
    contain a gap, so at most ``P - floor(P / (c + 1))`` of ``P`` periods are
    usable.

    Args:
        max_hours_per_day: Daily cap
        max_consecutive_hours: Consecutive-run cap

    Returns:
        Usable periods per day
    """
    by_runs = MAX_PERIOD - MAX_PERIOD // (max_consecutive_hours + 1)
    return max(0, min(max_hours_per_day, by_runs))
