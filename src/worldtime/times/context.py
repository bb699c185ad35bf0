"""Defines :class:`.TimeContext` and the calendar helpers shared by every instant.

A :class:`.TimeContext` binds instants to the :class:`.Location` that interprets them. It is
created once and shared by reference:

.. code-block:: python

    context = TimeContext(Location(latitude=0.89, longitude=-1.99))
    start = Instant.fromFields(2018, 1, 20, 12, 31, 0, context)
"""

from __future__ import annotations

# Standard Library Imports
from typing import TYPE_CHECKING

# Local Imports
from .constants import ITERATION_STEPS_US, JULIAN_DAY_OFFSET, MIN_YEAR
from .duration import Duration

# Type Checking Imports
if TYPE_CHECKING:
    # Local Imports
    from .location import Location

_DAYS_IN_MONTH: tuple[int, ...] = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def isLeapYear(year: int) -> bool:
    """Return whether `year` is a Gregorian leap year."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def daysInMonth(month: int, year: int) -> int:
    """Return the number of days in `month` (1-12) of `year`."""
    if month == 2 and isLeapYear(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def julianCount(month: int, year: int) -> int:
    """Return the day-of-year of the day before the first of `month`."""
    return sum(daysInMonth(previous, year) for previous in range(1, month))


def toJulian(year: int, month: int, day: int) -> tuple[int, int]:
    """Convert a calendar date into a ``(year, day_of_year)`` pair.

    Two digit years are expanded (``< 70`` into the 2000s, ``< 100`` into the 1900s), and any year
    before 1600 is moved forward by centuries.
    """
    year = _normalizeYear(year)
    return year, julianCount(month, year) + day


def fromJulian(year: int, day_of_year: int) -> tuple[int, int, int]:
    """Convert a ``(year, day_of_year)`` pair back into ``(year, month, day)``."""
    year = _normalizeYear(year)
    month = 1
    while month < 12 and day_of_year > daysInMonth(month, year):
        day_of_year -= daysInMonth(month, year)
        month += 1
    return year, month, day_of_year


def _normalizeYear(year: int) -> int:
    if year < 70:
        year += 2000
    elif year < 100:
        year += 1900
    while year < MIN_YEAR:
        year += 100
    return year


def julianDayNumber(year: int, month: int, day: int) -> int:
    """Return days since 1600-01-01 for a Gregorian date.

    January and February are treated as months 13 and 14 of the previous year before the
    Gregorian correction term is applied, so no floating point is involved.
    """
    if month <= 2:
        year -= 1
        month += 12
    century = year // 100
    correction = 2 - century + century // 4
    return (
        (1461 * (year + 4716)) // 4
        + (306001 * (month + 1)) // 10000
        + day
        + correction
        - 1524
        - JULIAN_DAY_OFFSET
    )


def calendarFromDayNumber(days: int) -> tuple[int, int, int]:
    """Invert :func:`.julianDayNumber`, returning ``(year, month, day)``."""
    jdn = days + JULIAN_DAY_OFFSET
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + m // 10
    return year, month, day


def timeForIndex(index: int) -> Duration:
    """Return the iteration step for one of the ``ITERATION_*`` indices.

    Unknown indices fall back to one week.
    """
    if 0 <= index < len(ITERATION_STEPS_US):
        return Duration.fromMicroSeconds(ITERATION_STEPS_US[index])
    return Duration.fromMicroSeconds(ITERATION_STEPS_US[-1])


def iterationIndex(step: Duration) -> int:
    """Return the ``ITERATION_*`` index matching `step`, or -1 when it is not a standard step."""
    try:
        return ITERATION_STEPS_US.index(step.getTotalMicroSeconds())
    except ValueError:
        return -1


class TimeContext:
    """Read-only binding between instants and the :class:`.Location` used to interpret them."""

    __slots__ = ("_location",)

    def __init__(self, location: Location):
        """Bind this context to `location`.

        Args:
            location (:class:`.Location`): location used for local, solar and DST adjustments.
        """
        self._location = location

    @property
    def location(self) -> Location:
        """:class:`.Location`: location bound to this context."""
        return self._location

    isLeapYear = staticmethod(isLeapYear)
    daysInMonth = staticmethod(daysInMonth)
    julianCount = staticmethod(julianCount)
    toJulian = staticmethod(toJulian)
    fromJulian = staticmethod(fromJulian)
    timeForIndex = staticmethod(timeForIndex)
    iterationIndex = staticmethod(iterationIndex)

    def __repr__(self) -> str:
        return f"TimeContext({self._location!r})"
