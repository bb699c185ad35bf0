"""Defines the :class:`.Duration` class, a signed span of time with microsecond resolution.

A :class:`.Duration` is a plain integer count of microseconds. Every accessor is integer division
or modulo of that total, truncating toward zero so that negative spans decompose symmetrically,
e.g. ``-1:30:00`` has ``getHours() == -1`` and ``getMinutes() == -30``.

Two independent text forms are supported, and each one parses what it prints:

.. code-block:: python

    span = Duration(3, 1, 5, 10, 500000)
    span.toISO8601()                      # 'P3DT1H5M10.5S'
    span.toString(DAY | INCLUDE_USECS)    # '3 days 01:05:10.500000'
    Duration.parseTime("P3DT1H5M10.5S")   # ParseResult(duration=Duration(...), count=4)
"""

from __future__ import annotations

# Standard Library Imports
import re
from typing import NamedTuple

# Local Imports
from .constants import (
    CONDITIONAL_TIME,
    DAY,
    EXCLUDE_SECONDS,
    INCLUDE_USECS,
    STRING_TIMEZONE,
    US_PER_DAY,
    US_PER_HOUR,
    US_PER_MINUTE,
    US_PER_SECOND,
    US_PER_WEEK,
    YEAR,
)

US_PER_YEAR: int = 365 * US_PER_DAY
"""``int``: length of a whole-year bucket, used when printing and parsing years."""

US_PER_MONTH: int = 30 * US_PER_DAY
"""``int``: approximate month length accepted by the ISO-8601 parser."""

_LEGACY_PATTERN = re.compile(
    r"""^\s*(?P<negative>-)?\s*
    (?:(?P<years>\d+)\s*years?\s*)?
    (?:(?P<days>\d+)\s*days?\s*)?
    (?:(?P<hours>\d+)
        (?::(?P<minutes>\d+)
            (?::(?P<seconds>\d+)(?:[.,](?P<fraction>\d+))?)?
        )?
    )?\s*$""",
    re.VERBOSE | re.IGNORECASE,
)

_ISO_DATE_UNITS = {"Y": US_PER_YEAR, "M": US_PER_MONTH, "W": US_PER_WEEK, "D": US_PER_DAY}
_ISO_TIME_UNITS = {"H": US_PER_HOUR, "M": US_PER_MINUTE, "S": US_PER_SECOND}


def _tdiv(numerator: int, denominator: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def _tmod(numerator: int, denominator: int) -> int:
    """Remainder matching :func:`._tdiv`, carrying the sign of the numerator."""
    return numerator - denominator * _tdiv(numerator, denominator)


def _scaledFraction(whole: str, fraction: str, unit: int) -> int:
    """Return ``whole.fraction`` units in microseconds using exact integer math."""
    total = int(whole) * unit if whole else 0
    if fraction:
        total += int(fraction) * unit // 10 ** len(fraction)
    return total


class ParseResult(NamedTuple):
    """Outcome of :meth:`.Duration.parseTime`."""

    duration: Duration | None
    """:class:`.Duration`: parsed span, ``None`` when nothing could be parsed."""

    count: int
    """``int``: number of fields consumed, ``0`` on failure."""


class Duration:
    """Signed span of time stored as total microseconds."""

    __slots__ = ("_us",)

    def __init__(
        self,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        microseconds: int = 0,
    ):
        """Build a span from its fields, each of which may exceed its natural range.

        Args:
            days (``int``, optional): whole days. Defaults to 0.
            hours (``int``, optional): whole hours. Defaults to 0.
            minutes (``int``, optional): whole minutes. Defaults to 0.
            seconds (``int``, optional): whole seconds. Defaults to 0.
            microseconds (``int``, optional): microseconds. Defaults to 0.
        """
        self._us = int(
            (((days * 24 + hours) * 60 + minutes) * 60 + seconds) * US_PER_SECOND + microseconds,
        )

    @classmethod
    def fromMicroSeconds(cls, microseconds: int) -> Duration:
        """Build a span from a total count of microseconds."""
        return cls(microseconds=int(microseconds))

    @classmethod
    def fromSeconds(cls, seconds: float) -> Duration:
        """Build a span from (possibly fractional) seconds, truncated to the microsecond."""
        return cls(microseconds=int(seconds * US_PER_SECOND))

    # Totals

    def getTotalMicroSeconds(self) -> int:
        """``int``: the whole span in microseconds."""
        return self._us

    def getTotalMilliSeconds(self) -> int:
        """``int``: the whole span in milliseconds."""
        return _tdiv(self._us, 1000)

    def getTotalSeconds(self) -> int:
        """``int``: the whole span in seconds."""
        return _tdiv(self._us, US_PER_SECOND)

    def getTotalMinutes(self) -> int:
        """``int``: the whole span in minutes."""
        return _tdiv(self._us, US_PER_MINUTE)

    def getTotalHours(self) -> int:
        """``int``: the whole span in hours."""
        return _tdiv(self._us, US_PER_HOUR)

    # Fields

    def getYears(self) -> int:
        """``int``: whole 365.25-day years in the span."""
        return int(self._us / US_PER_SECOND / 86400 / 365.25)

    def getWeeks(self) -> int:
        """``int``: whole weeks in the span."""
        return _tdiv(self._us, US_PER_WEEK)

    def getDays(self) -> int:
        """``int``: whole days in the span."""
        return _tdiv(self._us, US_PER_DAY)

    def getHours(self) -> int:
        """``int``: hours within the current day."""
        return self.getTotalHours() - self.getDays() * 24

    def getMinutes(self) -> int:
        """``int``: minutes within the current hour."""
        return self.getTotalMinutes() - self.getTotalHours() * 60

    def getSeconds(self) -> int:
        """``int``: seconds within the current minute."""
        return self.getTotalSeconds() - self.getTotalMinutes() * 60

    def getMilliSeconds(self) -> int:
        """``int``: milliseconds within the current second."""
        return self.getTotalMilliSeconds() - self.getTotalSeconds() * 1000

    def getMicroSeconds(self) -> int:
        """``int``: microseconds within the current second."""
        return _tmod(self._us, US_PER_SECOND)

    def getDaysFraction(self) -> float:
        """``float``: the whole span in fractional days."""
        return self._us / US_PER_DAY

    def getSecondsFraction(self) -> float:
        """``float``: the whole span in fractional seconds."""
        return self._us / US_PER_SECOND

    def getFractionOfSecond(self) -> float:
        """``float``: portion of the current second that has elapsed."""
        return _tmod(self._us, US_PER_SECOND) / US_PER_SECOND

    def getFractionOfMinute(self) -> float:
        """``float``: portion of the current minute that has elapsed."""
        return _tmod(self._us, US_PER_MINUTE) / US_PER_MINUTE

    def getFractionOfHour(self) -> float:
        """``float``: portion of the current hour that has elapsed."""
        return _tmod(self._us, US_PER_HOUR) / US_PER_HOUR

    def getFractionOfDay(self) -> float:
        """``float``: portion of the current day that has elapsed."""
        return _tmod(self._us, US_PER_DAY) / US_PER_DAY

    # Truncation

    def _purge(self, unit: int) -> Duration:
        return Duration.fromMicroSeconds(self._us - _tmod(self._us, unit))

    def purgeToSecond(self) -> Duration:
        """Drop the sub-second portion of the span."""
        return self._purge(US_PER_SECOND)

    def purgeToMinute(self) -> Duration:
        """Drop the sub-minute portion of the span."""
        return self._purge(US_PER_MINUTE)

    def purgeToHour(self) -> Duration:
        """Drop the sub-hour portion of the span."""
        return self._purge(US_PER_HOUR)

    def purgeToDay(self) -> Duration:
        """Drop the sub-day portion of the span."""
        return self._purge(US_PER_DAY)

    # Operators

    def __add__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration.fromMicroSeconds(self._us + other._us)

    def __sub__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration.fromMicroSeconds(self._us - other._us)

    def __neg__(self) -> Duration:
        return Duration.fromMicroSeconds(-self._us)

    def __pos__(self) -> Duration:
        return self

    def __abs__(self) -> Duration:
        return Duration.fromMicroSeconds(abs(self._us))

    def __mul__(self, factor: int | float) -> Duration:
        if isinstance(factor, bool) or not isinstance(factor, (int, float)):
            return NotImplemented
        return Duration.fromMicroSeconds(int(self._us * factor))

    __rmul__ = __mul__

    def __truediv__(self, divisor):
        if isinstance(divisor, Duration):
            return self._us / divisor._us
        if isinstance(divisor, int) and not isinstance(divisor, bool):
            return Duration.fromMicroSeconds(_tdiv(self._us, divisor))
        if isinstance(divisor, float):
            return Duration.fromMicroSeconds(int(self._us / divisor))
        return NotImplemented

    def __eq__(self, other) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._us == other._us

    def __lt__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._us < other._us

    def __le__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._us <= other._us

    def __gt__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._us > other._us

    def __ge__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._us >= other._us

    def __hash__(self) -> int:
        return hash(self._us)

    def __bool__(self) -> bool:
        return self._us != 0

    def __repr__(self) -> str:
        return f"Duration({self.toISO8601()!r})"

    # Formatting

    def toISO8601(self) -> str:
        """Return the span in ISO-8601 duration form, ``[-]P[nY][nD][T[nH][nM][n[.f]S]]``.

        Years are whole 365.25-day years, and the remaining days are counted against 365-day year
        buckets so that :meth:`.parseTime` reads back exactly the same span.
        """
        if self._us == 0:
            return "PT0M"

        span = abs(self)
        years = span.getYears()
        days = span.getDays() - years * 365
        hours, minutes = span.getHours(), span.getMinutes()
        seconds, usecs = span.getSeconds(), span.getMicroSeconds()

        text = "-P" if self._us < 0 else "P"
        if years > 0:
            text += f"{years}Y"
        if days > 0:
            text += f"{days}D"
        if hours or minutes or seconds or usecs:
            text += "T"
            if hours:
                text += f"{hours}H"
            if minutes:
                text += f"{minutes}M"
            if usecs:
                text += f"{seconds}.{usecs:06d}".rstrip("0") + "S"
            elif seconds:
                text += f"{seconds}S"
        return text

    def toString(self, flags: int = 0) -> str:
        """Return the span as text.

        Args:
            flags (``int``, optional): combination of ``DAY``, ``YEAR``, ``EXCLUDE_SECONDS``,
                ``INCLUDE_USECS``, ``CONDITIONAL_TIME``, or ``STRING_TIMEZONE`` for ISO-8601 output.
                Defaults to 0, which prints total hours as ``HH:MM:SS``.

        Returns:
            ``str``: formatted span; negative spans carry a single leading ``-``.
        """
        if flags & STRING_TIMEZONE:
            return self.toISO8601()

        magnitude = abs(self._us)
        if flags & EXCLUDE_SECONDS:
            magnitude = (magnitude + 30 * US_PER_SECOND) // US_PER_MINUTE * US_PER_MINUTE
        span = Duration.fromMicroSeconds(magnitude)

        with_days = bool(flags & (DAY | YEAR))
        years = span.getYears() if flags & YEAR else 0
        days = span.getDays() - years * 365 if with_days else 0
        hours = span.getHours() if with_days else span.getTotalHours()
        minutes, seconds, usecs = span.getMinutes(), span.getSeconds(), span.getMicroSeconds()

        if flags & EXCLUDE_SECONDS:
            clock = f"{hours:02d}:{minutes:02d}"
        elif flags & INCLUDE_USECS:
            clock = f"{hours:02d}:{minutes:02d}:{seconds:02d}.{usecs:06d}"
        else:
            clock = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
        sub_day_zero = not (hours or minutes or seconds or usecs)

        if years:
            year_text = "1 year" if years == 1 else f"{years} years"
            if sub_day_zero and not days and flags & CONDITIONAL_TIME:
                text = year_text
            else:
                day_text = "1 day" if days == 1 else f"{days} days"
                text = f"{year_text} {day_text} {clock}"
        elif days:
            day_text = "1 day" if days == 1 else f"{days} days"
            text = day_text if sub_day_zero and flags & CONDITIONAL_TIME else f"{day_text} {clock}"
        else:
            text = clock

        return f"-{text}" if self._us < 0 else text

    def __str__(self) -> str:
        return self.toString(DAY | INCLUDE_USECS)

    # Parsing

    @classmethod
    def parseTime(cls, text: str) -> ParseResult:
        """Parse either an ISO-8601 duration or the legacy ``[N days] H:MM:SS`` form.

        Callers must check :attr:`.ParseResult.count`, since the legacy grammar accepts partial
        input such as ``"5"`` (five hours) or ``"2 days"``.

        Args:
            text (``str``): text to parse.

        Returns:
            :class:`.ParseResult`: the parsed span and the number of fields consumed, or
            ``(None, 0)`` when the text is malformed.
        """
        trimmed = text.strip()
        if trimmed[:1] in ("P", "p") or trimmed[:2] in ("-P", "-p"):
            return cls._parseISO8601(trimmed)
        return cls._parseLegacy(trimmed)

    @classmethod
    def _parseISO8601(cls, text: str) -> ParseResult:
        negative = text.startswith("-")
        body = text[2:] if negative else text[1:]

        total, count = 0, 0
        after_t, finished = False, False
        whole, fraction, in_fraction = "", "", False
        for char in body:
            upper = char.upper()
            if finished:
                return ParseResult(None, 0)
            if upper == "T" and not (whole or in_fraction):
                if after_t:
                    return ParseResult(None, 0)
                after_t = True
            elif char in ".,":
                if in_fraction or not whole:
                    return ParseResult(None, 0)
                in_fraction = True
            elif char.isdigit():
                if in_fraction:
                    fraction += char
                else:
                    whole += char
            else:
                units = _ISO_TIME_UNITS if after_t else _ISO_DATE_UNITS
                if upper not in units or not whole:
                    return ParseResult(None, 0)
                total += _scaledFraction(whole, fraction, units[upper])
                count += 1
                # Only the smallest field may carry a fraction
                finished = in_fraction
                whole, fraction, in_fraction = "", "", False

        if whole or in_fraction or count == 0:
            return ParseResult(None, 0)
        return ParseResult(cls.fromMicroSeconds(-total if negative else total), count)

    @classmethod
    def _parseLegacy(cls, text: str) -> ParseResult:
        match = _LEGACY_PATTERN.match(text)
        if match is None:
            return ParseResult(None, 0)

        fields = match.groupdict()
        count = sum(
            1
            for name in ("years", "days", "hours", "minutes", "seconds")
            if fields[name] is not None
        )
        if count == 0:
            return ParseResult(None, 0)

        total = (
            int(fields["years"] or 0) * US_PER_YEAR
            + int(fields["days"] or 0) * US_PER_DAY
            + int(fields["hours"] or 0) * US_PER_HOUR
            + int(fields["minutes"] or 0) * US_PER_MINUTE
            + _scaledFraction(
                fields["seconds"] or "",
                (fields["fraction"] or "")[:6],
                US_PER_SECOND,
            )
        )
        if fields["negative"]:
            total = -total
        return ParseResult(cls.fromMicroSeconds(total), count)


ZERO = Duration()
ONE_SECOND = Duration(seconds=1)
ONE_MINUTE = Duration(minutes=1)
ONE_HOUR = Duration(hours=1)
ONE_DAY = Duration(days=1)

Duration.ZERO = ZERO
Duration.ONE_SECOND = ONE_SECOND
Duration.ONE_MINUTE = ONE_MINUTE
Duration.ONE_HOUR = ONE_HOUR
Duration.ONE_DAY = ONE_DAY
