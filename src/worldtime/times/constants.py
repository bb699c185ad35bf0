"""Format flags, adjustment flags and epoch constants shared by the time types.

All instants count microseconds from 1600-01-01T00:00:00 UTC. The layout flags occupy the low byte
of a format word and are mutually exclusive; every other flag is a single bit that can be combined.
"""

from __future__ import annotations

# Standard Library Imports
from typing import Final

US_PER_SECOND: Final[int] = 1_000_000
US_PER_MINUTE: Final[int] = 60 * US_PER_SECOND
US_PER_HOUR: Final[int] = 60 * US_PER_MINUTE
US_PER_DAY: Final[int] = 24 * US_PER_HOUR
US_PER_WEEK: Final[int] = 7 * US_PER_DAY
SECONDS_PER_DAY: Final[int] = 86400

UNSET_VALUE: Final[int] = 2**64 - 1
"""``int``: reserved value of an :class:`.Instant` that has not been set."""

# Epoch of the legacy archive layouts, relative to 1600-01-01
EPOCH_1900: Final[int] = 9467107200000000

JULIAN_DAY_OFFSET: Final[int] = 2305448
"""``int``: Julian Day Number of 1600-01-01."""

MIN_YEAR: Final[int] = 1600
MAX_YEAR: Final[int] = 2900

# Date layouts, low byte of the format word
LAYOUT_MASK: Final[int] = 0xFF
DD_MM_YYYY: Final[int] = 0x01
YYYY_MM_DD: Final[int] = 0x02
MM_DD_YYYY: Final[int] = 0x03
DDhMMhYYYY: Final[int] = 0x04  # noqa: N816
YYYYhMMhDD: Final[int] = 0x05  # noqa: N816
MMhDDhYYYY: Final[int] = 0x06  # noqa: N816
YYYYMMDD: Final[int] = 0x07
YYYYMMDDHH: Final[int] = 0x08
YYYYMMDDT: Final[int] = 0x10
YYYYhMMhDDT: Final[int] = 0x20  # noqa: N816

# Content flags
DAY_OF_WEEK: Final[int] = 0x00000100
STRING_TIMEZONE: Final[int] = 0x00000200
ABBREV: Final[int] = 0x00001000
INCLUDE_USECS: Final[int] = 0x00080000
TIME: Final[int] = 0x00100000
DAY: Final[int] = 0x00200000
MONTH: Final[int] = 0x00400000
YEAR: Final[int] = 0x00800000
DATE: Final[int] = DAY | MONTH
EXCLUDE_SECONDS: Final[int] = 0x20000000
CONDITIONAL_TIME: Final[int] = 0x40000000

# Adjustment flags
AS_LOCAL: Final[int] = 0x01000000
AS_SOLAR: Final[int] = 0x02000000
WITHDST: Final[int] = 0x04000000

ISO8601: Final[int] = STRING_TIMEZONE | YYYYhMMhDDT | DATE | TIME | AS_LOCAL | WITHDST
"""``int``: full ISO-8601 local time with the effective UTC offset."""

# Iteration step indices
ITERATION_1SEC: Final[int] = 0
ITERATION_1MIN: Final[int] = 1
ITERATION_5MIN: Final[int] = 2
ITERATION_15MIN: Final[int] = 3
ITERATION_30MIN: Final[int] = 4
ITERATION_1HOUR: Final[int] = 5
ITERATION_2HOUR: Final[int] = 6
ITERATION_1DAY: Final[int] = 7
ITERATION_1WEEK: Final[int] = 8

ITERATION_STEPS_US: Final[tuple[int, ...]] = (
    US_PER_SECOND,
    US_PER_MINUTE,
    5 * US_PER_MINUTE,
    15 * US_PER_MINUTE,
    30 * US_PER_MINUTE,
    US_PER_HOUR,
    2 * US_PER_HOUR,
    US_PER_DAY,
    US_PER_WEEK,
)

MONTHS: Final[tuple[str, ...]] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
MONTHS_ABBREV: Final[tuple[str, ...]] = tuple(month[:3] for month in MONTHS)
DAYS: Final[tuple[str, ...]] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)
DAYS_ABBREV: Final[tuple[str, ...]] = tuple(day[:3] for day in DAYS)
