"""Locale week numbers.

Weeks start on Sunday and week 1 is the week holding 3 January. Days before
that week belong to the last week of the previous year.
"""

from datetime import date, timedelta


SUNDAY = 6
FIRST_WEEK_CONTAINS = 3


def start_of_week(day: date, week_starts_on: int = SUNDAY) -> date:
    return day - timedelta(days=(day.weekday() - week_starts_on) % 7)


def _first_week_start(year: int, week_starts_on: int, first_week_contains: int) -> date:
    return start_of_week(date(year, 1, first_week_contains), week_starts_on)


def week_number(
    day: date | None = None,
    *,
    week_starts_on: int = SUNDAY,
    first_week_contains: int = FIRST_WEEK_CONTAINS,
) -> int:
    day = date.today() if day is None else day
    start = _first_week_start(day.year + 1, week_starts_on, first_week_contains)
    if day < start:
        start = _first_week_start(day.year, week_starts_on, first_week_contains)
    if day < start:
        start = _first_week_start(day.year - 1, week_starts_on, first_week_contains)
    return (start_of_week(day, week_starts_on) - start).days // 7 + 1
