from __future__ import annotations

# Standard Library Imports
from datetime import datetime, timedelta, timezone

# Third Party Imports
import pytest
from numpy import isclose

# WORLDTIME Imports
from worldtime.common.exceptions import AdjustmentFlagError
from worldtime.times.constants import (
    ABBREV,
    AS_LOCAL,
    AS_SOLAR,
    CONDITIONAL_TIME,
    DATE,
    DAY_OF_WEEK,
    DD_MM_YYYY,
    EXCLUDE_SECONDS,
    INCLUDE_USECS,
    ISO8601,
    MM_DD_YYYY,
    STRING_TIMEZONE,
    TIME,
    UNSET_VALUE,
    WITHDST,
    YEAR,
    YYYY_MM_DD,
    YYYYhMMhDD,
    YYYYMMDD,
    YYYYMMDDHH,
)
from worldtime.times.context import TimeContext
from worldtime.times.duration import Duration
from worldtime.times.instant import GLOBAL_MAX, GLOBAL_MIN, Instant
from worldtime.times.location import Location


@pytest.fixture(name="kolkata_context")
def getKolkataContext() -> TimeContext:
    """Return a context at UTC+05:30 without DST."""
    return TimeContext(Location(timezone=Duration(hours=5, minutes=30), dst_amount=Duration()))


@pytest.fixture(name="mountain_context")
def getMountainContext() -> TimeContext:
    """Return a context at UTC-07:00 with DST from March 11 02:00 to November 4 01:00."""
    location = Location(
        timezone=Duration(hours=-7),
        dst_start=Duration(days=69, hours=2),
        dst_end=Duration(days=307, hours=1),
        dst_amount=Duration(hours=1),
    )
    return TimeContext(location)


class TestInstantScenarios:
    """Test parsing and formatting round trips through a location."""

    def testLocalOffsetFormat(self, kolkata_context: TimeContext):
        """Test that a UTC time prints as local time at UTC+05:30."""
        parsed = Instant.unset(kolkata_context).parseDateTime("2018-01-20T12:31:00Z", ISO8601)
        assert parsed is not None
        assert parsed.getHour() == 12
        assert parsed.getMinute() == 31
        assert parsed.getHour(AS_LOCAL) == 18
        assert parsed.getMinute(AS_LOCAL) == 1
        assert parsed.toString(ISO8601) == "2018-01-20T18:01:00+05:30"

    def testLocalTimeWithoutMarker(self, kolkata_context: TimeContext):
        """Test that a time without an offset is read as local time."""
        parsed = Instant.unset(kolkata_context).parseDateTime("2018-01-20T18:01:00", ISO8601)
        assert parsed == Instant.fromFields(2018, 1, 20, 12, 31, 0, kolkata_context)

    def testDateOnly(self, utc_context: TimeContext):
        """Test that a date without a time parses to midnight."""
        base = Instant.fromFields(2018, 10, 4, 7, 30, 0, utc_context)
        parsed = base.parseDateTime("2018-10-22", ISO8601)
        assert parsed is not None
        assert parsed.getYear() == 2018
        assert parsed.getMonth() == 10
        assert parsed.getDay() == 22
        assert parsed.getHour() == 0
        assert parsed.getMinute() == 0
        assert parsed.context is utc_context

    def testExplicitOffsetWins(self, kolkata_context: TimeContext):
        """Test that an explicit offset overrides the location and is written to `out_location`."""
        found = Location()
        parsed = Instant.unset(kolkata_context).parseDateTime(
            "2018-07-01T12:00:00-06:00",
            ISO8601,
            out_location=found,
        )
        assert parsed == Instant.fromFields(2018, 7, 1, 18, 0, 0, kolkata_context)
        assert found.timezone == Duration(hours=-6)
        assert found.dst_amount == Duration()

    def testZulu(self, utc_context: TimeContext):
        """Test that a ``Z`` time parses without an output location."""
        parsed = Instant.unset(utc_context).parseDateTime("2018-01-20T00:00:00Z", ISO8601)
        assert parsed.toString(ISO8601) == "2018-01-20T00:00:00Z"


class TestInstantReadings:
    """Test the calendar readings of an :class:`.Instant`."""

    def testFields(self, utc_context: TimeContext):
        """Test the field getters."""
        instant = Instant.fromFields(2018, 1, 5, 3, 4, 5, utc_context, 678901)
        assert instant.getYear() == 2018
        assert instant.getMonth() == 1
        assert instant.getDay() == 5
        assert instant.getHour() == 3
        assert instant.getMinute() == 4
        assert instant.getSecond() == 5
        assert instant.getMilliSecond() == 678
        assert instant.getMicroSecond() == 678901
        assert instant.getDayOfYear() == 5
        assert instant.getSecondsIntoYear() == 4 * 86400 + 3 * 3600 + 4 * 60 + 5
        assert instant.getTimeOfDay() == Duration(0, 3, 4, 5, 678901)
        assert isclose(instant.getFractionOfSecond(), 0.678901)
        assert isclose(instant.getFractionOfDay(), (3 * 3600 + 4 * 60 + 5.678901) / 86400)
        assert isclose(instant.getDayFractionOfYear(), 5 + (3 * 3600 + 4 * 60 + 5) / 86400)
        assert not instant.isLeapYear()

    @pytest.mark.parametrize(
        ("year", "month", "day", "weekday"),
        [(1600, 1, 1, 7), (2000, 1, 1, 7), (2018, 1, 20, 7), (2024, 6, 16, 1), (2024, 6, 17, 2)],
    )
    def testDayOfWeek(self, year: int, month: int, day: int, weekday: int):
        """Test that days of the week run from Sunday as ``1`` to Saturday as ``7``."""
        assert Instant.fromFields(year, month, day, 12, 0, 0, None).getDayOfWeek() == weekday

    def testJulianDay(self):
        """Test the astronomical Julian Day at J2000 and at the epoch."""
        assert isclose(Instant.fromFields(2000, 1, 1, 12, 0, 0, None).getJulianDay(), 2451545.0)
        assert isclose(Instant.fromFields(2000, 1, 1, 0, 0, 0, None).getJulianDay(), 2451544.5)

    def testFloatSeconds(self):
        """Test fractional seconds truncated to the microsecond."""
        instant = Instant.fromFloatSeconds(2018, 1, 5, 3, 4, 5.25, None)
        assert instant.getSecond() == 5
        assert instant.getMicroSecond() == 250000

    def testCarryOver(self):
        """Test that fields past their range carry into the next unit."""
        assert Instant.fromFields(2018, 1, 31, 24, 0, 0, None) == Instant.fromFields(
            2018,
            2,
            1,
            0,
            0,
            0,
            None,
        )

    def testGlobalBounds(self, utc_context: TimeContext):
        """Test the default simulation bounds."""
        assert GLOBAL_MIN.getYear() == 1900
        assert GLOBAL_MAX.getYear() == 2100
        assert Instant.globalMin(utc_context).context is utc_context
        assert Instant.globalMax(utc_context).value == GLOBAL_MAX.value
        assert Instant.fromSeconds(0, None).value == 0

    def testDatetimeConversion(self):
        """Test conversion to and from :class:`datetime.datetime`."""
        moment = datetime(2018, 1, 20, 12, 31, 0, 250, tzinfo=timezone.utc)
        instant = Instant.fromDatetime(moment, None)
        assert instant.getMicroSecond() == 250
        assert instant.toDatetime() == moment

        shifted = moment.astimezone(timezone(timedelta(hours=-6)))
        assert Instant.fromDatetime(shifted, None) == instant
        assert Instant.fromDatetime(moment.replace(tzinfo=None), None) == instant

    def testNowIsRecent(self, utc_context: TimeContext):
        """Test that :meth:`.Instant.now` matches the system clock to the second."""
        before = datetime.now(timezone.utc).replace(microsecond=0)
        now = Instant.now(utc_context)
        after = datetime.now(timezone.utc)
        assert before <= now.toDatetime() <= after
        assert Instant.now(utc_context, EXCLUDE_SECONDS).getSecond() == 0


class TestInstantAdjustment:
    """Test local, daylight saving and solar readings."""

    def testLocalReading(self, kolkata_context: TimeContext):
        """Test that local readings cross the date line of the offset."""
        instant = Instant.fromFields(2018, 1, 20, 20, 0, 0, kolkata_context)
        assert instant.getDay() == 20
        assert instant.getDay(AS_LOCAL) == 21
        assert instant.getHour(AS_LOCAL) == 1
        assert instant.getMinute(AS_LOCAL) == 30
        assert instant.getDayOfWeek(AS_LOCAL) == 1

    def testDSTStartBoundary(self, mountain_context: TimeContext):
        """Test that DST applies from the first microsecond of its window."""
        start = Instant.fromFields(2023, 3, 11, 9, 0, 0, mountain_context)
        assert start.getHour(AS_LOCAL) == 2
        assert start.getHour(AS_LOCAL | WITHDST) == 3

        before = start - Duration(microseconds=1)
        assert before.getHour(AS_LOCAL | WITHDST) == 1
        assert before.getMinute(AS_LOCAL | WITHDST) == 59

    def testDSTEndBoundary(self, mountain_context: TimeContext):
        """Test that the end of the DST window is exclusive."""
        end = Instant.fromFields(2023, 11, 4, 8, 0, 0, mountain_context)
        assert end.getHour(AS_LOCAL | WITHDST) == 1
        assert end.getMinute(AS_LOCAL | WITHDST) == 0

        before = end - Duration(microseconds=1)
        assert before.getHour(AS_LOCAL | WITHDST) == 1
        assert before.getMinute(AS_LOCAL | WITHDST) == 59

    def testWrappedWindow(self):
        """Test a southern hemisphere window that wraps over the new year."""
        location = Location(
            timezone=Duration(hours=10),
            dst_start=Duration(days=273),
            dst_end=Duration(days=90),
            dst_amount=Duration(hours=1),
        )
        context = TimeContext(location)
        summer = Instant.fromFields(2023, 1, 15, 0, 0, 0, context)
        winter = Instant.fromFields(2023, 6, 15, 0, 0, 0, context)
        assert summer.getHour(AS_LOCAL | WITHDST) == 11
        assert winter.getHour(AS_LOCAL | WITHDST) == 10
        assert summer.toString(ISO8601).endswith("+11:00")
        assert winter.toString(ISO8601).endswith("+10:00")

    def testDSTWithoutLocalOffset(self, mountain_context: TimeContext):
        """Test that ``WITHDST`` alone adds the DST amount to UTC."""
        summer = Instant.fromFields(2023, 7, 1, 12, 0, 0, mountain_context)
        assert summer.getHour(WITHDST) == 13
        assert summer.getHour(AS_LOCAL) == 5

    def testSolarWithLocalFails(self, mountain_context: TimeContext):
        """Test that solar time can't be combined with local time or DST."""
        instant = Instant.fromFields(2023, 7, 1, 12, 0, 0, mountain_context)
        with pytest.raises(AdjustmentFlagError):
            instant.getHour(AS_SOLAR | AS_LOCAL)
        with pytest.raises(AdjustmentFlagError):
            instant.toString(ISO8601 | AS_SOLAR)

    def testZeroIsNeverAdjusted(self, mountain_context: TimeContext):
        """Test that the zero instant is read as-is, whatever the flags."""
        zero = Instant(0, mountain_context)
        assert zero.getHour(AS_SOLAR | AS_LOCAL) == 0
        assert zero.getYear(AS_LOCAL) == 1600

    def testNoContext(self):
        """Test that an instant without a context reads the same with any flags."""
        instant = Instant.fromFields(2023, 7, 1, 12, 0, 0, None)
        assert instant.getHour(AS_LOCAL | WITHDST) == 12
        assert instant.location is None
        assert Instant.convert(instant, AS_LOCAL, 1) == instant

    def testConvert(self, kolkata_context: TimeContext):
        """Test shifting between UTC and local time."""
        utc = Instant.fromFields(2018, 1, 20, 12, 31, 0, kolkata_context)
        local = Instant.convert(utc, AS_LOCAL, 1)
        assert local.getHour() == 18
        assert Instant.convert(local, AS_LOCAL, -1) == utc
        assert Instant.convert(utc, AS_LOCAL, 0) == utc

    def testSolarNoon(self):
        """Test that solar noon reads 12:00 in solar time."""
        location = Location.fromDegrees(51.5, -0.13)
        context = TimeContext(location)
        midday = Instant.fromFields(2024, 11, 3, 12, 0, 0, context)
        noon = location.sunRiseSet(midday).noon
        assert noon.getTimeOfDay(AS_SOLAR) == Duration(hours=12)


class TestInstantArithmetic:
    """Test arithmetic, truncation and comparison."""

    def testDurationArithmetic(self, utc_context: TimeContext):
        """Test adding and subtracting durations and instants."""
        start = Instant.fromFields(2018, 1, 20, 12, 0, 0, utc_context)
        later = start + Duration(hours=36)
        assert later == Instant.fromFields(2018, 1, 22, 0, 0, 0, utc_context)
        assert Duration(hours=36) + start == later
        assert later - Duration(hours=36) == start
        assert later - start == Duration(hours=36)
        assert start - later == -Duration(hours=36)
        assert later.context is utc_context

    def testPurge(self, kolkata_context: TimeContext):
        """Test truncation to whole units, in UTC and in local time."""
        ctx = kolkata_context
        instant = Instant.fromFields(2018, 1, 20, 20, 45, 30, ctx, 500)
        assert instant.purgeToSecond() == Instant.fromFields(2018, 1, 20, 20, 45, 30, ctx)
        assert instant.purgeToMinute() == Instant.fromFields(2018, 1, 20, 20, 45, 0, ctx)
        assert instant.purgeToHour() == Instant.fromFields(2018, 1, 20, 20, 0, 0, ctx)
        assert instant.purgeToDay() == Instant.fromFields(2018, 1, 20, 0, 0, 0, ctx)
        assert instant.purgeToDay(AS_LOCAL) == Instant.fromFields(2018, 1, 20, 18, 30, 0, ctx)
        assert instant.purgeToYear() == Instant.fromFields(2018, 1, 1, 0, 0, 0, ctx)

    def testAddYears(self):
        """Test that added years are sized by the year being left."""
        leap = Instant.fromFields(2020, 3, 1, 0, 0, 0, None)
        assert leap.addYears(1) == Instant.fromFields(2021, 3, 2, 0, 0, 0, None)
        common = Instant.fromFields(2021, 3, 1, 0, 0, 0, None)
        assert common.addYears(1) == Instant.fromFields(2022, 3, 1, 0, 0, 0, None)
        assert common.addYears(0) == common

    def testSubtractYears(self):
        """Test that subtracted years are sized by the year entered."""
        common = Instant.fromFields(2021, 3, 1, 0, 0, 0, None)
        assert common.subtractYears(1) == Instant.fromFields(2020, 2, 29, 0, 0, 0, None)
        assert common.subtractYears(2) == Instant.fromFields(2019, 3, 1, 0, 0, 0, None)

    def testOrdering(self, utc_context: TimeContext):
        """Test the comparison operators."""
        early = Instant.fromFields(2018, 1, 20, 0, 0, 0, utc_context)
        late = Instant.fromFields(2018, 1, 21, 0, 0, 0, utc_context)
        assert early < late
        assert early <= late
        assert late > early
        assert late >= early
        assert early != late
        assert early == Instant(early.value, utc_context)
        assert hash(early) == hash(Instant(early.value, utc_context))

    def testMismatchedContexts(self, utc_context: TimeContext, kolkata_context: TimeContext):
        """Test that instants of different contexts can't be compared."""
        first = Instant.fromFields(2018, 1, 20, 0, 0, 0, utc_context)
        second = Instant.fromFields(2018, 1, 20, 0, 0, 0, kolkata_context)
        with pytest.raises(AssertionError):
            _ = first < second
        assert first.withContext(kolkata_context) == second

    def testUnsetPropagation(self, utc_context: TimeContext):
        """Test that an unset instant stays unset through every operation."""
        unset = Instant.unset(utc_context)
        other = Instant.fromFields(2018, 1, 20, 0, 0, 0, utc_context)
        assert not unset.isValid()
        assert unset.value == UNSET_VALUE
        assert unset.getYear() == -1
        assert unset.getHour(AS_LOCAL) == -1
        assert unset.getDayOfWeek() == -1
        assert unset.getJulianDay() == -1.0
        assert unset.getTimeIntoYear() == Duration(microseconds=-1)
        assert unset.getTotalSeconds() == -1
        assert not unset.isLeapYear()
        assert unset.toDatetime() is None
        assert unset.toString(ISO8601) == "[Time Not Set]"
        assert repr(unset) == "Instant(unset)"

        assert not (unset + Duration(hours=1)).isValid()
        assert not (unset - Duration(hours=1)).isValid()
        assert not unset.purgeToDay().isValid()
        assert not unset.addYears(1).isValid()
        assert unset - other == Duration(microseconds=-1)
        assert not unset < other
        assert not unset > other
        assert unset == Instant.unset(utc_context)


class TestInstantFormat:
    """Test :meth:`.Instant.toString`."""

    @pytest.fixture(name="instant")
    def getInstant(self, utc_context: TimeContext) -> Instant:
        """Return 2018-01-05T03:04:35.250000Z."""
        return Instant.fromFields(2018, 1, 5, 3, 4, 35, utc_context, 250000)

    @pytest.mark.parametrize(
        ("flags", "expected"),
        [
            (DATE | TIME | DD_MM_YYYY, "05/01/2018 03:04:35"),
            (DATE | TIME | MM_DD_YYYY, "01/05/2018 03:04:35"),
            (DATE | TIME | YYYY_MM_DD, "2018/01/05 03:04:35"),
            (DATE | YYYYhMMhDD, "2018-01-05"),
            (DATE | YYYYMMDD, "20180105"),
            (DATE | YYYYMMDDHH, "2018010503"),
            (DATE | TIME | INCLUDE_USECS | YYYYhMMhDD, "2018-01-05 03:04:35.250000"),
            (DATE | TIME | EXCLUDE_SECONDS | YYYYhMMhDD, "2018-01-05 03:05"),
            (DATE | YEAR, "January  5, 2018"),
            (DAY_OF_WEEK | ABBREV | DATE | YEAR, "Fri Jan  5, 2018"),
            (DAY_OF_WEEK, "Friday"),
            (TIME, "03:04:35"),
            (ISO8601, "2018-01-05T03:04:35Z"),
            (DATE | YYYYhMMhDD | STRING_TIMEZONE, "2018-01-05Z"),
        ],
    )
    def testLayouts(self, instant: Instant, flags: int, expected: str):
        """Test each layout and content flag."""
        assert instant.toString(flags) == expected

    def testConditionalTime(self, utc_context: TimeContext):
        """Test that a conditional time is left out at midnight."""
        midnight = Instant.fromFields(2018, 1, 5, 0, 0, 0, utc_context)
        flags = DATE | CONDITIONAL_TIME | YYYY_MM_DD
        assert midnight.toString(flags) == "2018/01/05"
        assert (midnight + Duration(seconds=1)).toString(flags) == "2018/01/05 00:00:01"

    def testStrAndRepr(self, instant: Instant):
        """Test the default text forms."""
        assert str(instant) == "2018/01/05 03:04:35"
        assert repr(instant) == "Instant('2018-01-05T03:04:35.250000')"

    def testOffsetMinutes(self):
        """Test a negative offset with minutes."""
        location = Location(timezone=-Duration(hours=3, minutes=30), dst_amount=Duration())
        instant = Instant.fromFields(2018, 1, 5, 12, 0, 0, TimeContext(location))
        assert instant.toString(ISO8601) == "2018-01-05T08:30:00-03:30"


class TestInstantParse:
    """Test :meth:`.Instant.parseDateTime`."""

    @pytest.mark.parametrize(
        ("text", "flags", "expected"),
        [
            ("20/01/2018", DD_MM_YYYY, (2018, 1, 20)),
            ("01/20/2018", MM_DD_YYYY, (2018, 1, 20)),
            ("2018/01/20", YYYY_MM_DD, (2018, 1, 20)),
            ("2018-01-20", 0, (2018, 1, 20)),
            ("05/06/2018", 0, (2018, 6, 5)),
            ("12/25/2018", 0, (2018, 12, 25)),
            ("20 January 2018", 0, (2018, 1, 20)),
            ("Jan 20, 2018", 0, (2018, 1, 20)),
            ("20-jan-2018", 0, (2018, 1, 20)),
            ("20/01/18", DD_MM_YYYY, (2018, 1, 20)),
            ("20/01/85", DD_MM_YYYY, (1985, 1, 20)),
            ("20180120", YYYYMMDD, (2018, 1, 20)),
        ],
    )
    def testDates(self, utc_context: TimeContext, text: str, flags: int, expected: tuple):
        """Test explicit and guessed date layouts."""
        parsed = Instant.unset(utc_context).parseDateTime(text, flags)
        assert parsed is not None
        assert (parsed.getYear(), parsed.getMonth(), parsed.getDay()) == expected

    @pytest.mark.parametrize(
        ("text", "flags"),
        [
            ("", 0),
            ("abc", 0),
            ("20180120", 0),
            ("2018012", YYYYMMDD),
            ("2018AB20", YYYYMMDD),
            ("32/01/2018", DD_MM_YYYY),
            ("20/13/2018", DD_MM_YYYY),
            ("0/01/2018", DD_MM_YYYY),
            ("1500-01-01", 0),
            ("2900-01-01", 0),
            ("20/01/50", DD_MM_YYYY),
            ("20/01", DD_MM_YYYY),
            ("January 20 2018", DD_MM_YYYY),
        ],
    )
    def testMalformed(self, utc_context: TimeContext, text: str, flags: int):
        """Test that malformed dates parse to ``None``."""
        assert Instant.unset(utc_context).parseDateTime(text, flags) is None

    def testCompactHour(self, utc_context: TimeContext):
        """Test the ``YYYYMMDDHH`` layout."""
        parsed = Instant.unset(utc_context).parseDateTime("2018012015", YYYYMMDDHH)
        assert parsed == Instant.fromFields(2018, 1, 20, 15, 0, 0, utc_context)

    def testTimeOfDay(self, utc_context: TimeContext):
        """Test that a time of day keeps its microseconds."""
        parsed = Instant.unset(utc_context).parseDateTime(
            "2018-01-20 12:31:15.5",
            YYYYhMMhDD | TIME,
        )
        assert parsed == Instant.fromFields(2018, 1, 20, 12, 31, 15, utc_context, 500000)

    def testTimeIgnoredWithoutFlag(self, utc_context: TimeContext):
        """Test that a trailing time is ignored unless ``TIME`` is requested."""
        parsed = Instant.unset(utc_context).parseDateTime("2018-01-20 12:31:15", YYYYhMMhDD)
        assert parsed == Instant.fromFields(2018, 1, 20, 0, 0, 0, utc_context)

    def testLocalWithDST(self, mountain_context: TimeContext):
        """Test that a local summer time is read through the DST window."""
        parsed = Instant.unset(mountain_context).parseDateTime(
            "2023-07-01 12:00:00",
            YYYYhMMhDD | TIME | AS_LOCAL | WITHDST,
        )
        assert parsed == Instant.fromFields(2023, 7, 1, 18, 0, 0, mountain_context)

    def testOffsetDuringDST(self, mountain_context: TimeContext):
        """Test that an explicit offset is exact whatever the DST window says."""
        parsed = Instant.unset(mountain_context).parseDateTime(
            "2023-07-01T12:00:00+02:00",
            ISO8601,
        )
        assert parsed == Instant.fromFields(2023, 7, 1, 10, 0, 0, mountain_context)
        assert parsed.toString(ISO8601) == "2023-07-01T04:00:00-06:00"
