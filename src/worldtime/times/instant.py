"""Defines the :class:`.Instant` class, an absolute point in time bound to a :class:`.TimeContext`.

Instants are unsigned microsecond counts since 1600-01-01T00:00:00 UTC. Every reading takes a flags
word so the same value can be viewed in UTC, in local standard time, in local time with daylight
saving, or in mean solar time:

.. code-block:: python

    context = TimeContext(Location(timezone=Duration(hours=5, minutes=30)))
    start = Instant(0, context).parseDateTime("2018-01-20T12:31:00Z", ISO8601)
    start.toString(ISO8601)               # '2018-01-20T18:01:00+05:30'
    start.getHour(AS_LOCAL)               # 18

The reserved value :data:`.UNSET_VALUE` marks an instant that was never set. It propagates through
every operation: readings return ``-1``, ``-1.0`` or ``False`` and arithmetic returns another unset
instant.
"""

from __future__ import annotations

# Standard Library Imports
import re
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

# Local Imports
from ..common.exceptions import AdjustmentFlagError
from ..common.logger import worldtimeLogError
from .constants import (
    ABBREV,
    AS_LOCAL,
    AS_SOLAR,
    CONDITIONAL_TIME,
    DATE,
    DAY,
    DAY_OF_WEEK,
    DAYS,
    DAYS_ABBREV,
    DD_MM_YYYY,
    DDhMMhYYYY,
    EXCLUDE_SECONDS,
    INCLUDE_USECS,
    JULIAN_DAY_OFFSET,
    LAYOUT_MASK,
    MAX_YEAR,
    MIN_YEAR,
    MM_DD_YYYY,
    MMhDDhYYYY,
    MONTH,
    MONTHS,
    MONTHS_ABBREV,
    STRING_TIMEZONE,
    TIME,
    UNSET_VALUE,
    US_PER_DAY,
    US_PER_HOUR,
    US_PER_MINUTE,
    US_PER_SECOND,
    WITHDST,
    YEAR,
    YYYY_MM_DD,
    YYYYhMMhDD,
    YYYYhMMhDDT,
    YYYYMMDD,
    YYYYMMDDHH,
    YYYYMMDDT,
)
from .context import calendarFromDayNumber, isLeapYear, julianDayNumber
from .duration import Duration

# Type Checking Imports
if TYPE_CHECKING:
    # Local Imports
    from .context import TimeContext
    from .location import Location


_DELIMITERS = "./\\:;-, \t"
_ISO_DELIMITERS = _DELIMITERS + "T"
_LEADING_NUMBER = re.compile(r"\d+")
_EPOCH = datetime(MIN_YEAR, 1, 1, tzinfo=timezone.utc)

_DAY_FIRST = (DD_MM_YYYY, DDhMMhYYYY)
_YEAR_FIRST = (YYYY_MM_DD, YYYYhMMhDD, YYYYhMMhDDT)
_MONTH_FIRST = (MM_DD_YYYY, MMhDDhYYYY)
_COMPACT = (YYYYMMDD, YYYYMMDDT, YYYYMMDDHH)
_T_LAYOUTS = (YYYYhMMhDDT, YYYYMMDDT)


def _nextToken(text: str, start: int, delimiters: str) -> tuple[str | None, int]:
    """Return the next token of `text` from `start` and the position after its delimiter.

    Runs of delimiters are collapsed, so empty tokens never occur.
    """
    index = start
    while index < len(text) and text[index] in delimiters:
        index += 1
    if index >= len(text):
        return None, len(text)
    end = index
    while end < len(text) and text[end] not in delimiters:
        end += 1
    return text[index:end], min(end + 1, len(text))


def _monthFromName(token: str) -> int | None:
    folded = token.casefold()
    for index, (name, abbrev) in enumerate(zip(MONTHS, MONTHS_ABBREV)):
        if folded in (name.casefold(), abbrev.casefold()):
            return index + 1
    return None


def _leadingNumber(token: str) -> int | None:
    match = _LEADING_NUMBER.match(token)
    return int(match.group()) if match else None


class Instant:
    """Absolute point in time, stored in UTC, read through the :class:`.Location` of its context.

    Instants are immutable; arithmetic and the ``purgeTo*`` methods return new instances that share
    the same :class:`.TimeContext`. Equality and ordering compare the stored value only. When both
    operands are set and nonzero they are asserted to share a context, a check that disappears
    under ``python -O``.
    """

    __slots__ = ("_value", "_context")

    def __init__(self, value: int = UNSET_VALUE, context: TimeContext | None = None):
        """Wrap a raw value.

        Args:
            value (``int``, optional): microseconds since 1600-01-01 UTC. Defaults to unset.
            context (:class:`.TimeContext`, optional): context used for local and solar readings.
        """
        self._value = int(value)
        self._context = context

    # Construction

    @classmethod
    def fromFields(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int,
        minute: int,
        second: int,
        context: TimeContext | None,
        microsecond: int = 0,
    ) -> Instant:
        """Build a UTC instant from calendar fields; fields past their natural range carry over."""
        days = julianDayNumber(year, month, day)
        seconds = ((days * 24 + hour) * 60 + minute) * 60 + second
        return cls(seconds * US_PER_SECOND + microsecond, context)

    @classmethod
    def fromFloatSeconds(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int,
        minute: int,
        seconds: float,
        context: TimeContext | None,
    ) -> Instant:
        """Build a UTC instant whose seconds field is fractional, truncated to the microsecond."""
        start = cls.fromFields(year, month, day, hour, minute, 0, context)
        return cls(start._value + int(seconds * US_PER_SECOND), context)

    @classmethod
    def fromSeconds(cls, seconds: int, context: TimeContext | None) -> Instant:
        """Build an instant from whole seconds since 1600-01-01 UTC."""
        if seconds == UNSET_VALUE:
            return cls(UNSET_VALUE, context)
        return cls(int(seconds) * US_PER_SECOND, context)

    @classmethod
    def convert(cls, source: Instant, flags: int, direction: int) -> Instant:
        """Shift `source` between UTC and the zone described by `flags`.

        Args:
            source (:class:`.Instant`): instant to shift.
            flags (``int``): adjustment flags, e.g. ``AS_LOCAL | WITHDST``.
            direction (``int``): negative treats `source` as local time and returns UTC, positive
                treats it as UTC and returns local time, zero returns a copy.

        Returns:
            :class:`.Instant`: the shifted instant, in the same context.
        """
        if source._context is None:
            return cls(source._value, None)
        adjusted = source._adjusted(flags)
        if direction < 0:
            return cls(source._value - (adjusted - source._value), source._context)
        if direction > 0:
            return cls(adjusted, source._context)
        return cls(source._value, source._context)

    @classmethod
    def now(cls, context: TimeContext | None, flags: int = 0) -> Instant:
        """Return the current time to the second, converted from `flags` local time into UTC."""
        current = datetime.now(timezone.utc)
        second = 0 if flags & EXCLUDE_SECONDS else current.second
        temp = cls.fromFields(
            current.year,
            current.month,
            current.day,
            current.hour,
            current.minute,
            second,
            context,
        )
        return cls.convert(temp, flags, -1)

    @classmethod
    def fromDatetime(cls, moment: datetime, context: TimeContext | None) -> Instant:
        """Build an instant from a :class:`datetime.datetime`; naive values are taken as UTC."""
        if moment.tzinfo is not None:
            moment = moment.astimezone(timezone.utc)
        return cls.fromFields(
            moment.year,
            moment.month,
            moment.day,
            moment.hour,
            moment.minute,
            moment.second,
            context,
            moment.microsecond,
        )

    def toDatetime(self) -> datetime | None:
        """Return the UTC value as an aware :class:`datetime.datetime`, or ``None`` when unset."""
        if not self.isValid():
            return None
        return _EPOCH + timedelta(microseconds=self._value)

    @classmethod
    def unset(cls, context: TimeContext | None = None) -> Instant:
        return cls(UNSET_VALUE, context)

    @classmethod
    def globalMin(cls, context: TimeContext | None = None) -> Instant:
        """Return 1900-01-01T00:00:00 UTC in `context`."""
        return cls(GLOBAL_MIN._value, context)

    @classmethod
    def globalMax(cls, context: TimeContext | None = None) -> Instant:
        """Return 2100-01-01T00:00:00 UTC in `context`."""
        return cls(GLOBAL_MAX._value, context)

    def withContext(self, context: TimeContext | None) -> Instant:
        """Return the same point in time read through `context`."""
        return Instant(self._value, context)

    # Properties

    @property
    def value(self) -> int:
        """``int``: microseconds since 1600-01-01 UTC, or :data:`.UNSET_VALUE`."""
        return self._value

    @property
    def context(self) -> TimeContext | None:
        """:class:`.TimeContext`: context used for local and solar readings."""
        return self._context

    @property
    def location(self) -> Location | None:
        """:class:`.Location`: location of the context, if any."""
        return self._context.location if self._context is not None else None

    def isValid(self) -> bool:
        """Return whether this instant has been set."""
        return self._value != UNSET_VALUE

    # Adjustment

    def _adjusted(self, flags: int) -> int:
        """Return the value shifted into the time base selected by `flags`.

        Zero and unset values are never adjusted.
        """
        if self._value in (0, UNSET_VALUE) or not flags:
            return self._value
        if flags & AS_SOLAR and flags & (AS_LOCAL | WITHDST):
            msg = "Solar time cannot be combined with local time or daylight saving"
            worldtimeLogError(msg)
            raise AdjustmentFlagError(msg)

        location = self.location
        if location is None:
            return self._value

        if flags & AS_LOCAL:
            time = self._value + location.timezone.getTotalMicroSeconds()
        elif flags & AS_SOLAR:
            time = self._value + location.solarTimezone(self).getTotalMicroSeconds()
        else:
            time = self._value

        if flags & WITHDST and location.dstEnabled():
            if location.inDSTWindow(Duration.fromMicroSeconds(_timeIntoYear(time))):
                time += location.dst_amount.getTotalMicroSeconds()
        return time

    def _date(self, flags: int) -> tuple[int, int, int]:
        return calendarFromDayNumber(self._adjusted(flags) // US_PER_DAY)

    # Calendar readings

    def getYear(self, flags: int = 0) -> int:
        if not self.isValid():
            return -1
        return self._date(flags)[0]

    def getMonth(self, flags: int = 0) -> int:
        if not self.isValid():
            return -1
        return self._date(flags)[1]

    def getDay(self, flags: int = 0) -> int:
        if not self.isValid():
            return -1
        return self._date(flags)[2]

    def getHour(self, flags: int = 0) -> int:
        if not self.isValid():
            return -1
        return self._adjusted(flags) // US_PER_HOUR % 24

    def getMinute(self, flags: int = 0) -> int:
        if not self.isValid():
            return -1
        return self._adjusted(flags) // US_PER_MINUTE % 60

    def getSecond(self, flags: int = 0) -> int:
        if not self.isValid():
            return -1
        return self._adjusted(flags) // US_PER_SECOND % 60

    def getMilliSecond(self, flags: int = 0) -> int:
        if not self.isValid():
            return -1
        return self._adjusted(flags) // 1000 % 1000

    def getMicroSecond(self, flags: int = 0) -> int:
        if not self.isValid():
            return -1
        return self._adjusted(flags) % US_PER_SECOND

    def getDayOfWeek(self, flags: int = 0) -> int:
        """Return the day of the week, ``1`` for Sunday through ``7`` for Saturday."""
        if not self.isValid():
            return -1
        # 1600-01-01 was a Saturday
        weekday = self._adjusted(flags) // US_PER_DAY % 7
        return 7 if weekday == 0 else weekday

    def getTimeIntoYear(self, flags: int = 0) -> Duration:
        """Return the time since January 1 00:00 of the adjusted year."""
        if not self.isValid():
            return Duration.fromMicroSeconds(-1)
        return Duration.fromMicroSeconds(_timeIntoYear(self._adjusted(flags)))

    def getSecondsIntoYear(self, flags: int = 0) -> int:
        if not self.isValid():
            return -1
        return _timeIntoYear(self._adjusted(flags)) // US_PER_SECOND

    def getDayOfYear(self, flags: int = 0) -> int:
        """Return the 1-based day of the adjusted year."""
        if not self.isValid():
            return -1
        return _timeIntoYear(self._adjusted(flags)) // US_PER_DAY + 1

    def getDayFractionOfYear(self, flags: int = 0) -> float:
        """Return the 1-based day of the year including the elapsed fraction of the day."""
        if not self.isValid():
            return -1.0
        seconds = _timeIntoYear(self._adjusted(flags)) // US_PER_SECOND
        return seconds / 86400.0 + 1.0

    def getTimeOfDay(self, flags: int = 0) -> Duration:
        if not self.isValid():
            return Duration.fromMicroSeconds(-1)
        return Duration.fromMicroSeconds(self._adjusted(flags) % US_PER_DAY)

    def getFractionOfSecond(self, flags: int = 0) -> float:
        if not self.isValid():
            return -1.0
        return (self._adjusted(flags) % US_PER_SECOND) / US_PER_SECOND

    def getFractionOfMinute(self, flags: int = 0) -> float:
        if not self.isValid():
            return -1.0
        return (self._adjusted(flags) % US_PER_MINUTE) / US_PER_MINUTE

    def getFractionOfHour(self, flags: int = 0) -> float:
        if not self.isValid():
            return -1.0
        return (self._adjusted(flags) % US_PER_HOUR) / US_PER_HOUR

    def getFractionOfDay(self, flags: int = 0) -> float:
        if not self.isValid():
            return -1.0
        return (self._adjusted(flags) % US_PER_DAY) / US_PER_DAY

    def isLeapYear(self, flags: int = 0) -> bool:
        if not self.isValid():
            return False
        return isLeapYear(self.getYear(flags))

    def getJulianDay(self, flags: int = 0) -> float:
        """Return the astronomical Julian Day of the adjusted value, ``2451545.0`` at J2000."""
        if not self.isValid():
            return -1.0
        return self._adjusted(flags) / US_PER_DAY + JULIAN_DAY_OFFSET - 0.5

    def getTotalSeconds(self) -> int:
        if not self.isValid():
            return -1
        return self._value // US_PER_SECOND

    def getTotalMicroSeconds(self) -> int:
        if not self.isValid():
            return -1
        return self._value

    # Arithmetic

    def _purge(self, flags: int, unit: int) -> Instant:
        if not self.isValid():
            return self
        return Instant(self._value - self._adjusted(flags) % unit, self._context)

    def purgeToSecond(self, flags: int = 0) -> Instant:
        return self._purge(flags, US_PER_SECOND)

    def purgeToMinute(self, flags: int = 0) -> Instant:
        return self._purge(flags, US_PER_MINUTE)

    def purgeToHour(self, flags: int = 0) -> Instant:
        return self._purge(flags, US_PER_HOUR)

    def purgeToDay(self, flags: int = 0) -> Instant:
        """Return the start of the day containing this instant, as seen through `flags`."""
        return self._purge(flags, US_PER_DAY)

    def purgeToYear(self, flags: int = 0) -> Instant:
        if not self.isValid():
            return self
        return Instant(self._value - _timeIntoYear(self._adjusted(flags)), self._context)

    def addYears(self, years: int) -> Instant:
        """Advance by `years` calendar years, sized by the year being left.

        [NOTE]: the leap test uses the year being left, so adding one year to 2020-03-01 lands on
        2021-03-02.
        """
        if not self.isValid():
            return self
        total = 0
        year = self.getYear()
        for _ in range(years):
            total += 366 if isLeapYear(year) else 365
            year += 1
        return Instant(self._value + total * US_PER_DAY, self._context)

    def subtractYears(self, years: int) -> Instant:
        """Go back `years` calendar years, each sized by the leap-ness of the year entered."""
        if not self.isValid():
            return self
        total = 0
        year = self.getYear() - 1
        for _ in range(years):
            total += 366 if isLeapYear(year) else 365
            year -= 1
        return Instant(self._value - total * US_PER_DAY, self._context)

    def __add__(self, other: Duration) -> Instant:
        if not isinstance(other, Duration):
            return NotImplemented
        if not self.isValid():
            return self
        return Instant(self._value + other.getTotalMicroSeconds(), self._context)

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, Duration):
            if not self.isValid():
                return self
            return Instant(self._value - other.getTotalMicroSeconds(), self._context)
        if isinstance(other, Instant):
            self._checkContext(other)
            if not self.isValid():
                return Duration.fromMicroSeconds(-1)
            return Duration.fromMicroSeconds(self._value - other._value)
        return NotImplemented

    # Comparison

    def _checkContext(self, other: Instant) -> None:
        if self._value not in (0, UNSET_VALUE) and other._value not in (0, UNSET_VALUE):
            assert self._context is other._context, "instants compared across time contexts"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        self._checkContext(other)
        return self._value == other._value

    def __lt__(self, other: Instant) -> bool:
        self._checkContext(other)
        return self.isValid() and self._value < other._value

    def __le__(self, other: Instant) -> bool:
        self._checkContext(other)
        return self.isValid() and self._value <= other._value

    def __gt__(self, other: Instant) -> bool:
        self._checkContext(other)
        return self.isValid() and self._value > other._value

    def __ge__(self, other: Instant) -> bool:
        self._checkContext(other)
        return self.isValid() and self._value >= other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        if not self.isValid():
            return "Instant(unset)"
        return f"Instant({self.toString(DATE | YEAR | TIME | INCLUDE_USECS | YYYYhMMhDDT)!r})"

    def __str__(self) -> str:
        return self.toString(DATE | YEAR | TIME | YYYY_MM_DD)

    # Formatting

    def toString(self, flags: int) -> str:
        """Format this instant.

        Args:
            flags (``int``): one layout (``DD_MM_YYYY`` through ``YYYYhMMhDDT``), any of the content
                flags ``DAY_OF_WEEK``, ``ABBREV``, ``DAY``, ``MONTH``, ``YEAR``, ``TIME``,
                ``CONDITIONAL_TIME``, ``EXCLUDE_SECONDS``, ``INCLUDE_USECS``, ``STRING_TIMEZONE``,
                and the adjustment flags. With ``DATE`` but no layout the month is spelled out,
                e.g. ``"January 20, 2018"``.

        Returns:
            ``str``: the formatted text, ``"[Time Not Set]"`` when unset.
        """
        if not self.isValid():
            return "[Time Not Set]"

        adjusted = self._adjusted(flags)
        if flags & EXCLUDE_SECONDS:
            adjusted += 30 * US_PER_SECOND
        year, month, day = calendarFromDayNumber(adjusted // US_PER_DAY)
        hour = adjusted // US_PER_HOUR % 24
        minute = adjusted // US_PER_MINUTE % 60
        second = adjusted // US_PER_SECOND % 60
        usecs = adjusted % US_PER_SECOND
        weekday = adjusted // US_PER_DAY % 7 or 7

        if flags & ABBREV:
            month_text, day_text = MONTHS_ABBREV[month - 1], DAYS_ABBREV[weekday - 1]
        else:
            month_text, day_text = MONTHS[month - 1], DAYS[weekday - 1]

        text = ""
        need_space = False
        if flags & DAY_OF_WEEK:
            text = day_text
            need_space = True

        layout = flags & LAYOUT_MASK
        if flags & DATE:
            if need_space:
                text += " "
            need_space = True
            if layout == DD_MM_YYYY:
                text += f"{day:02d}/{month:02d}/{year:04d}"
            elif layout == YYYY_MM_DD:
                text += f"{year:04d}/{month:02d}/{day:02d}"
            elif layout == MM_DD_YYYY:
                text += f"{month:02d}/{day:02d}/{year:04d}"
            elif layout == DDhMMhYYYY:
                text += f"{day:02d}-{month:02d}-{year:04d}"
            elif layout in (YYYYhMMhDD, YYYYhMMhDDT):
                text += f"{year:04d}-{month:02d}-{day:02d}"
            elif layout == MMhDDhYYYY:
                text += f"{month:02d}-{day:02d}-{year:04d}"
            elif layout in (YYYYMMDD, YYYYMMDDT):
                text += f"{year:04d}{month:02d}{day:02d}"
            elif layout == YYYYMMDDHH:
                text += f"{year:04d}{month:02d}{day:02d}{hour:02d}"
            elif flags & MONTH:
                text += f"{month_text} {day:2d}" if flags & DAY else month_text
                if flags & YEAR:
                    text += f", {year}"
            elif flags & DAY:
                text += f"{day:2d}"

        if flags & TIME or (flags & CONDITIONAL_TIME and (usecs or second or minute or hour)):
            if layout in _T_LAYOUTS and flags & DATE:
                text += "T"
            elif need_space:
                text += " "
            if flags & EXCLUDE_SECONDS:
                text += f"{hour:02d}:{minute:02d}"
            elif flags & INCLUDE_USECS:
                text += f"{hour:02d}:{minute:02d}:{second:02d}.{usecs:06d}"
            else:
                text += f"{hour:02d}:{minute:02d}:{second:02d}"

        if flags & STRING_TIMEZONE and (location := self.location) is not None:
            text += _offsetText(location.effectiveOffset(self))
        return text

    # Parsing

    def parseDateTime(
        self,
        text: str,
        flags: int,
        out_location: Location | None = None,
    ) -> Instant | None:
        """Parse a date and optional time, returning a new instant in this instant's context.

        The date is three numbers split by any of ``./\\:;-,`` or whitespace, or an undelimited
        ``YYYYMMDD``/``YYYYMMDDHH`` when that layout is requested. Without a layout flag the order
        is guessed: a first number of 32 or more is a year, otherwise day before month. Month names
        are accepted in English. Two digit years below 39 are 20xx and those from 61 are 19xx.

        With ``TIME`` set the rest of the text is a time of day optionally followed by ``Z`` or
        ``±HH:MM``. The parsed fields are read as local time according to the adjustment flags,
        unless an explicit offset was given, in which case that offset wins and is written into
        `out_location` (with no DST).

        Args:
            text (``str``): text to parse.
            flags (``int``): layout, ``TIME`` and adjustment flags, e.g. :data:`.ISO8601`.
            out_location (:class:`.Location`, optional): receives the offset found in `text`.

        Returns:
            :class:`.Instant`: the parsed instant, or ``None`` when `text` is malformed.
        """
        layout = flags & LAYOUT_MASK
        offset: Duration | None = None
        offset_marker = False
        microsecond = 0

        if not any(char in text for char in _DELIMITERS):
            if layout not in _COMPACT:
                return None
            if layout == YYYYMMDD and len(text) != 8:
                return None
            if layout == YYYYMMDDHH and len(text) != 10:
                return None
            parts = [text[0:4], text[4:6], text[6:8]]
            if layout == YYYYMMDDHH:
                parts.append(text[8:10])
            if not all(part.isdigit() for part in parts):
                return None
            year, month, day = (int(part) for part in parts[:3])
            hour = int(parts[3]) if layout == YYYYMMDDHH else 0
            minute = second = 0
        else:
            fields = self._parseDate(text, layout)
            if fields is None:
                return None
            (year, month, day), position = fields

            hour = minute = second = 0
            rest = text[position:]
            if flags & TIME and rest:
                if "Z" in rest:
                    offset = Duration()
                    clock, _ = _nextToken(rest, 0, "-+Z")
                else:
                    offset_marker = "+" in rest or "-" in rest
                    clock, after = _nextToken(rest, 0, "-+Z")
                    if offset_marker and after < len(rest):
                        parsed_offset = Duration.parseTime(rest[after:])
                        if parsed_offset.count:
                            seconds = parsed_offset.duration.getTotalSeconds()
                            offset = Duration(seconds=-seconds if "-" in rest else seconds)

                parsed_clock = Duration.parseTime(clock) if clock else None
                if parsed_clock is not None and parsed_clock.count:
                    hour = parsed_clock.duration.getHours()
                    minute = parsed_clock.duration.getMinutes()
                    second = parsed_clock.duration.getSeconds()
                    microsecond = parsed_clock.duration.getMicroSeconds()

        if not MIN_YEAR <= year < MAX_YEAR:
            return None

        parsed = Instant.fromFields(
            year,
            month,
            day,
            hour,
            minute,
            second,
            self._context,
            microsecond,
        )
        location = self.location
        if offset is not None:
            if out_location is not None:
                out_location.timezone = offset
                out_location.dst_amount = Duration()
            shift = -offset
            if location is not None:
                shift += location.timezone
                if location.inDSTWindow(parsed.getTimeIntoYear()):
                    shift += location.dst_amount
            parsed = parsed + shift
        elif offset_marker and out_location is not None:
            out_location.timezone = Duration()
            out_location.dst_amount = Duration()

        return Instant(parsed._value - (parsed._adjusted(flags) - parsed._value), self._context)

    @staticmethod
    def _parseDate(text: str, layout: int) -> tuple[tuple[int, int, int], int] | None:
        """Read the three date tokens, returning ``((year, month, day), position)`` or ``None``."""
        guess_month = 0

        first, position = _nextToken(text, 0, _DELIMITERS)
        if first is None:
            return None
        if not first[0].isdigit():
            if layout not in (*_MONTH_FIRST, 0):
                return None
            if (v1 := _monthFromName(first)) is None:
                return None
            guess_month = 1
        elif (v1 := _leadingNumber(first)) is None:
            return None

        second, position = _nextToken(text, position, _DELIMITERS)
        if second is None:
            return None
        if not second[0].isdigit():
            if layout not in (*_DAY_FIRST, *_YEAR_FIRST, 0):
                return None
            if (v2 := _monthFromName(second)) is None:
                return None
            guess_month = 2
        elif (v2 := _leadingNumber(second)) is None:
            return None

        delimiters = _ISO_DELIMITERS if layout == YYYYhMMhDDT else _DELIMITERS
        third, position = _nextToken(text, position, delimiters)
        if third is None or not third[0].isdigit():
            return None
        v3 = _leadingNumber(third)

        if not layout:
            if guess_month == 1:
                if v3 >= 32:
                    layout = MM_DD_YYYY
            elif guess_month == 2:
                if v3 >= 32:
                    layout = DD_MM_YYYY
                elif v1 >= 32:
                    layout = YYYY_MM_DD
            elif v1 >= 32:
                layout = YYYY_MM_DD
            elif v3 >= 32 and v2 > 12:
                layout = MM_DD_YYYY

        if layout in _DAY_FIRST or not layout:
            day, month, year = v1, v2, v3
        elif layout in _YEAR_FIRST:
            year, month, day = v1, v2, v3
        elif layout in _MONTH_FIRST:
            month, day, year = v1, v2, v3
        else:
            return None

        if not 1 <= day < 32 or not 1 <= month <= 12:
            return None
        if year < 39:
            year += 2000
        elif 60 < year < 100:
            year += 1900
        return (year, month, day), position


def _timeIntoYear(value: int) -> int:
    """Microseconds from January 1 00:00 of the year containing the raw `value`."""
    year = calendarFromDayNumber(value // US_PER_DAY)[0]
    return value - julianDayNumber(year, 1, 1) * US_PER_DAY


def _offsetText(offset: Duration) -> str:
    """Return ``Z`` or ``±HH:MM`` for a UTC offset, truncated to the minute."""
    minutes = offset.getTotalMinutes()
    if minutes == 0:
        return "Z"
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


GLOBAL_MIN = Instant.fromFields(1900, 1, 1, 0, 0, 0, None)
""":class:`.Instant`: 1900-01-01T00:00:00 UTC, the default simulation lower bound."""

GLOBAL_MAX = Instant.fromFields(2100, 1, 1, 0, 0, 0, None)
""":class:`.Instant`: 2100-01-01T00:00:00 UTC, the default simulation upper bound."""
