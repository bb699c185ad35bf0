"""Sunrise, sunset and solar noon using the NOAA solar position algorithm.

All functions take latitudes in degrees (north positive) and longitudes in degrees **west
positive**, as the NOAA worksheets do. Event times are minutes past midnight UTC of the requested
date, so values below 0 or above 1440 belong to the neighbouring day.

References:
    #. NOAA Global Monitoring Laboratory, "Solar Calculation Details"
    #. :cite:t:`meeus_1998_astro`, Chapters 7, 22 and 25
"""

from __future__ import annotations

# Standard Library Imports
from typing import NamedTuple

# Third Party Imports
from numpy import arccos, arcsin, cos, degrees, floor, radians, sin, tan

# Local Imports
from ..common.behavioral_config import BehavioralConfig
from ..common.logger import worldtimeLogWarning
from .constants import (
    DAYS_PER_JULIAN_CENTURY,
    J2000_JD,
    MAX_SOLAR_LATITUDE_DEG,
    MIN_PER_DAY,
    POLAR_CIRCLE_DEG,
    ZENITH_SUNRISE_DEG,
)

NO_SUNRISE: int = 0x1
"""``int``: flag set when no sunrise could be found for the requested date."""

NO_SUNSET: int = 0x2
"""``int``: flag set when no sunset could be found for the requested date."""


class ClockTime(NamedTuple):
    """Calendar date and time of day of a solar event, in UTC."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int


class RiseSetResult(NamedTuple):
    """Output of :meth:`.SolarEngine.calcSun`."""

    flags: int
    """``int``: combination of :data:`.NO_SUNRISE` and :data:`.NO_SUNSET`."""

    rise: ClockTime | None
    """:class:`.ClockTime`: sunrise, or the nearest one found by the polar search."""

    set: ClockTime | None
    """:class:`.ClockTime`: sunset, or the nearest one found by the polar search."""

    noon: ClockTime
    """:class:`.ClockTime`: solar noon on the requested date."""

    eq_time: float
    """``float``: equation of time in minutes, floored to 0.01."""

    solar_declination: float
    """``float``: solar declination in degrees, floored to 0.01."""


def calcJD(year: int, month: int, day: int) -> float:
    """Julian date at 0h UT of a Gregorian calendar date."""
    if month <= 2:
        year -= 1
        month += 12
    century = floor(year / 100.0)
    correction = 2 - century + floor(century / 4.0)
    return float(
        floor(365.25 * (year + 4716)) + floor(30.6001 * (month + 1)) + day + correction - 1524.5,
    )


def calcDayFromJD(julian_date: float) -> tuple[int, int, int]:
    """Return the ``(year, month, day)`` containing a Julian date."""
    whole = floor(julian_date + 0.5)
    fraction = (julian_date + 0.5) - whole
    if whole < 2299161:
        shifted = whole
    else:
        alpha = floor((whole - 1867216.25) / 36524.25)
        shifted = whole + 1 + alpha - floor(alpha / 4.0)

    b = shifted + 1524
    c = floor((b - 122.1) / 365.25)
    d = floor(365.25 * c)
    e = floor((b - d) / 30.6001)

    day = int(b - d - floor(30.6001 * e) + fraction)
    month = int(e - 1 if e < 14 else e - 13)
    year = int(c - 4716 if month > 2 else c - 4715)
    return year, month, day


def calcDayOfYear(month: int, day: int, leap_year: bool) -> int:
    """Day of the year, January 1st being 1."""
    k = 1 if leap_year else 2
    return int(floor((275.0 * month) / 9.0) - k * floor((month + 9.0) / 12.0) + day - 30.0)


def calcTimeJulianCent(julian_date: float) -> float:
    """Julian centuries since J2000.0."""
    return (julian_date - J2000_JD) / DAYS_PER_JULIAN_CENTURY


def calcJDFromJulianCent(t: float) -> float:
    """Julian date of a Julian-centuries value."""
    return t * DAYS_PER_JULIAN_CENTURY + J2000_JD


def calcGeomMeanLongSun(t: float) -> float:
    """Geometric mean longitude of the Sun, degrees in [0, 360)."""
    longitude = 280.46646 + t * (36000.76983 + 0.0003032 * t)
    return float(longitude % 360.0)


def calcGeomMeanAnomalySun(t: float) -> float:
    """Geometric mean anomaly of the Sun, degrees."""
    return 357.52911 + t * (35999.05029 - 0.0001537 * t)


def calcEccentricityEarthOrbit(t: float) -> float:
    """Eccentricity of Earth's orbit, unitless."""
    return 0.016708634 - t * (0.000042037 + 0.0000001267 * t)


def calcSunEqOfCenter(t: float) -> float:
    """Equation of center of the Sun, degrees."""
    m = radians(calcGeomMeanAnomalySun(t))
    return float(
        sin(m) * (1.914602 - t * (0.004817 + 0.000014 * t))
        + sin(2 * m) * (0.019993 - 0.000101 * t)
        + sin(3 * m) * 0.000289,
    )


def calcSunTrueLong(t: float) -> float:
    """True longitude of the Sun, degrees."""
    return calcGeomMeanLongSun(t) + calcSunEqOfCenter(t)


def calcSunApparentLong(t: float) -> float:
    """Apparent longitude of the Sun, degrees."""
    omega = 125.04 - 1934.136 * t
    return float(calcSunTrueLong(t) - 0.00569 - 0.00478 * sin(radians(omega)))


def calcMeanObliquityOfEcliptic(t: float) -> float:
    """Mean obliquity of the ecliptic, degrees."""
    seconds = 21.448 - t * (46.8150 + t * (0.00059 - t * 0.001813))
    return 23.0 + (26.0 + seconds / 60.0) / 60.0


def calcObliquityCorrection(t: float) -> float:
    """Corrected obliquity of the ecliptic, degrees."""
    omega = 125.04 - 1934.136 * t
    return float(calcMeanObliquityOfEcliptic(t) + 0.00256 * cos(radians(omega)))


def calcSunDeclination(t: float) -> float:
    """Declination of the Sun, degrees."""
    obliquity = radians(calcObliquityCorrection(t))
    apparent = radians(calcSunApparentLong(t))
    return float(degrees(arcsin(sin(obliquity) * sin(apparent))))


def calcEquationOfTime(t: float) -> float:
    """Difference between true and mean solar time, minutes."""
    obliquity = calcObliquityCorrection(t)
    mean_long = radians(calcGeomMeanLongSun(t))
    eccentricity = calcEccentricityEarthOrbit(t)
    anomaly = radians(calcGeomMeanAnomalySun(t))

    y = tan(radians(obliquity) / 2.0) ** 2
    equation = (
        y * sin(2.0 * mean_long)
        - 2.0 * eccentricity * sin(anomaly)
        + 4.0 * eccentricity * y * sin(anomaly) * cos(2.0 * mean_long)
        - 0.5 * y * y * sin(4.0 * mean_long)
        - 1.25 * eccentricity * eccentricity * sin(2.0 * anomaly)
    )
    return float(degrees(equation) * 4.0)


def _hourAngleArgument(latitude: float, declination: float) -> float | None:
    lat_rad = radians(latitude)
    dec_rad = radians(declination)
    denominator = cos(lat_rad) * cos(dec_rad)
    if abs(denominator) < 1.0e-7:
        return None
    argument = cos(radians(ZENITH_SUNRISE_DEG)) / denominator - tan(lat_rad) * tan(dec_rad)
    if abs(argument) > 1.0:
        return None
    return float(argument)


def calcHourAngleSunrise(latitude: float, declination: float) -> float | None:
    """Hour angle of sunrise in radians, ``None`` when the Sun does not rise."""
    argument = _hourAngleArgument(latitude, declination)
    return None if argument is None else float(arccos(argument))


def calcHourAngleSunset(latitude: float, declination: float) -> float | None:
    """Hour angle of sunset in radians, ``None`` when the Sun does not set."""
    argument = _hourAngleArgument(latitude, declination)
    return None if argument is None else float(-arccos(argument))


def _eventUTC(julian_date: float, latitude: float, longitude: float, hour_angle) -> float | None:
    """Two-pass estimate of a rise or set event, in minutes UTC."""
    t = calcTimeJulianCent(julian_date)
    time_utc = None
    for _ in range(2):
        angle = hour_angle(latitude, calcSunDeclination(t))
        if angle is None:
            return None
        time_utc = 720.0 + 4.0 * (longitude - degrees(angle)) - calcEquationOfTime(t)
        # Second pass refines the Julian centuries with the fractional day of the first estimate
        t = calcTimeJulianCent(julian_date + time_utc / MIN_PER_DAY)
    return float(time_utc)


def calcSunriseUTC(julian_date: float, latitude: float, longitude: float) -> float | None:
    """Sunrise in minutes UTC on the date of `julian_date`, ``None`` when there is none."""
    return _eventUTC(julian_date, latitude, longitude, calcHourAngleSunrise)


def calcSunsetUTC(julian_date: float, latitude: float, longitude: float) -> float | None:
    """Sunset in minutes UTC on the date of `julian_date`, ``None`` when there is none."""
    return _eventUTC(julian_date, latitude, longitude, calcHourAngleSunset)


def calcSolNoonUTC(t: float, longitude: float) -> float:
    """Solar noon in minutes UTC for Julian centuries `t`."""
    return 720.0 + longitude * 4.0 - calcEquationOfTime(t)


def _clockTime(minutes: float, julian_date: float) -> ClockTime:
    """Split minutes past midnight of `julian_date` into a calendar date and whole seconds."""
    total_seconds = int(floor(minutes * 60.0))
    day_shift, second_of_day = divmod(total_seconds, 86400)
    year, month, day = calcDayFromJD(julian_date + day_shift)
    hour, remainder = divmod(second_of_day, 3600)
    minute, second = divmod(remainder, 60)
    return ClockTime(year, month, day, hour, minute, second)


class SolarEngine:
    """Stateless calculator for sunrise, sunset and solar noon.

    The polar search looks for the nearest day on which the missing event happens. It is bounded
    by ``BehavioralConfig.times.SolarSearchLimit`` day steps; when the bound is exhausted the event
    is reported as missing.
    """

    def __init__(self, search_limit: int | None = None):
        """Create a calculator.

        Args:
            search_limit (``int``, optional): maximum day steps for the polar search. Defaults to
                the configured ``times.SolarSearchLimit``.
        """
        if search_limit is None:
            search_limit = BehavioralConfig.getConfig().times.SolarSearchLimit
        self.search_limit = search_limit

    def _search(self, julian_date, latitude, longitude, event_func, step) -> float | None:
        """Step one day at a time until `event_func` finds an event."""
        for _ in range(self.search_limit + 1):
            if event_func(julian_date, latitude, longitude) is not None:
                return julian_date
            julian_date += step

        worldtimeLogWarning(
            f"No solar event within {self.search_limit} days of JD {julian_date:.1f} at "
            f"latitude {latitude:.2f}",
        )
        return None

    def calcSun(
        self,
        year: int,
        month: int,
        day: int,
        latitude: float,
        longitude: float,
    ) -> RiseSetResult:
        """Calculate sunrise, sunset and solar noon for a date and place.

        Inside the polar circles, a day without a sunrise (or sunset) reports the nearest one
        instead: during the local summer half of the year the previous sunrise and the next sunset,
        during the winter half the next sunrise and the previous sunset. Elsewhere a missing event
        only sets the matching flag.

        Args:
            year (``int``): calendar year
            month (``int``): calendar month, 1-12
            day (``int``): day of month
            latitude (``float``): latitude in degrees, north positive
            longitude (``float``): longitude in degrees, **west positive**

        Returns:
            :class:`.RiseSetResult`: event times in UTC plus the supporting quantities.
        """
        latitude = max(-MAX_SOLAR_LATITUDE_DEG, min(MAX_SOLAR_LATITUDE_DEG, latitude))

        julian_date = calcJD(year, month, day)
        leap = year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)
        day_of_year = calcDayOfYear(month, day, leap)
        t = calcTimeJulianCent(julian_date)

        eq_time = floor(100.0 * calcEquationOfTime(t)) / 100.0
        solar_dec = floor(100.0 * calcSunDeclination(t)) / 100.0

        northern_summer = 79 < day_of_year < 267
        northern_winter = day_of_year < 83 or day_of_year > 263
        polar_summer = (latitude > POLAR_CIRCLE_DEG and northern_summer) or (
            latitude < -POLAR_CIRCLE_DEG and northern_winter
        )
        polar_winter = (latitude > POLAR_CIRCLE_DEG and northern_winter) or (
            latitude < -POLAR_CIRCLE_DEG and northern_summer
        )
        rise_step = sunset_step = None
        if polar_summer:
            rise_step, sunset_step = -1.0, 1.0
        elif polar_winter:
            rise_step, sunset_step = 1.0, -1.0

        flags = 0
        rise = self._event(julian_date, latitude, longitude, calcSunriseUTC, rise_step)
        if rise is None:
            flags |= NO_SUNRISE
        sunset = self._event(julian_date, latitude, longitude, calcSunsetUTC, sunset_step)
        if sunset is None:
            flags |= NO_SUNSET

        noon = _clockTime(calcSolNoonUTC(t, longitude), julian_date)
        return RiseSetResult(flags, rise, sunset, noon, float(eq_time), float(solar_dec))

    def _event(self, julian_date, latitude, longitude, event_func, step):
        """Return the clock time of an event on the date, or the nearest one in polar regions."""
        minutes = event_func(julian_date, latitude, longitude)
        if minutes is not None:
            return _clockTime(minutes, julian_date)

        if step is None:
            return None

        found = self._search(julian_date, latitude, longitude, event_func, step)
        if found is None:
            return None
        return _clockTime(event_func(found, latitude, longitude), found)
