"""Calendar helpers for ages and age-bounded date ranges."""

from __future__ import annotations

from datetime import date
from typing import Optional, Tuple


def years_between(start: date, end: date) -> int:
    """Return the number of whole years from `start` to `end`.

    A year is counted on the anniversary of `start`; a 29 February start
    completes its year on 1 March when `end` falls in a non-leap year.
    """
    years = end.year - start.year
    if (end.month, end.day) < (start.month, start.day):
        years -= 1
    return years


def minus_years(day: date, years: int) -> date:
    """Shift `day` back by `years`, clamping 29 February to the 28th.

    Results outside the calendar saturate at `date.min` or `date.max`.
    """
    year = day.year - years
    if year < date.min.year:
        return date.min
    if year > date.max.year:
        return date.max
    try:
        return day.replace(year=year)
    except ValueError:
        return day.replace(year=year, day=28)


def date_of_birth_range(
    min_age: Optional[int], max_age: Optional[int], today: date
) -> Tuple[Optional[date], Optional[date]]:
    """Translate an age range into an inclusive `(start, end)` birth-date range.

    `min_age = a` bounds births at `today - a years` from above; `max_age = b`
    bounds them at `today - (b + 1) years` from below, since a person turns
    `b + 1` exactly on that date. Absent ages leave their side open (`None`).
    An inverted age range yields `start > end` and matches nothing.
    """
    end = minus_years(today, min_age) if min_age is not None else None
    start = minus_years(today, max_age + 1) if max_age is not None else None
    return start, end
