"""Defines the :class:`.Location` class, a geographic point bound to a timezone/DST profile.

A location carries a raw UTC offset and a daylight saving window measured from the start of the
year. ``dst_start == dst_end`` means DST is disabled. A :class:`.ZoneRecord` can be attached with
:meth:`.Location.setZone`; assigning any raw timezone field afterwards detaches it, so an attached
record always agrees with the raw fields.
"""

from __future__ import annotations

# Standard Library Imports
from typing import TYPE_CHECKING, NamedTuple

# Third Party Imports
from numpy import deg2rad, rad2deg

# Local Imports
from ..common.behavioral_config import BehavioralConfig
from ..physics.solar import NO_SUNRISE, NO_SUNSET, SolarEngine
from ..zones.borders import AUSTRALIA_MAINLAND, CANADA, NEW_ZEALAND, TASMANIA
from ..zones.catalog import ZoneCatalog
from ..zones.records import DST_SET_STANDARD
from .constants import AS_LOCAL, AS_SOLAR
from .context import julianDayNumber
from .duration import Duration
from .instant import Instant

# Type Checking Imports
if TYPE_CHECKING:
    # Local Imports
    from ..physics.solar import ClockTime
    from ..zones.records import ZoneRecord


UNSET_COORDINATE: float = 1000.0
"""``float``: latitude/longitude of a location whose position has not been set."""

_DEFAULT_CATALOG = ZoneCatalog()


class SunEvent(NamedTuple):
    """Sunrise, sunset and solar noon of one day at a location."""

    rise: Instant
    """:class:`.Instant`: sunrise, value ``0`` when the day has none."""

    set: Instant  # noqa: A003
    """:class:`.Instant`: sunset, value ``0`` when the day has none."""

    noon: Instant
    """:class:`.Instant`: solar noon."""

    flags: int
    """``int``: combination of :data:`.NO_SUNRISE` and :data:`.NO_SUNSET`."""


class Location:
    """Geographic point with a timezone offset, a DST window and per-instance solar caches.

    Latitude and longitude are in radians. The sun and solar-offset caches are keyed by
    ``(latitude, longitude, day)`` and are cleared whenever the position or a timezone field
    changes. Instances are not synchronized; share them across threads only with external locking.
    """

    def __init__(
        self,
        latitude: float = UNSET_COORDINATE,
        longitude: float = UNSET_COORDINATE,
        timezone: Duration | None = None,
        dst_start: Duration | None = None,
        dst_end: Duration | None = None,
        dst_amount: Duration | None = None,
        catalog: ZoneCatalog | None = None,
        solar_engine: SolarEngine | None = None,
    ):
        """Create a location.

        Args:
            latitude (``float``, optional): latitude in radians. Defaults to unset.
            longitude (``float``, optional): longitude in radians. Defaults to unset.
            timezone (:class:`.Duration`, optional): raw UTC offset. Defaults to zero.
            dst_start (:class:`.Duration`, optional): DST start from the start of the year.
            dst_end (:class:`.Duration`, optional): DST end from the start of the year.
            dst_amount (:class:`.Duration`, optional): DST amount. Defaults to the configured
                ``times.DefaultDSTHours``.
            catalog (:class:`.ZoneCatalog`, optional): zone resolution, use one built with a
                :class:`.ZoneDatabase` to resolve IANA names and coordinates.
            solar_engine (:class:`.SolarEngine`, optional): sunrise/sunset calculator.
        """
        config = BehavioralConfig.getConfig()
        if dst_amount is None:
            dst_amount = Duration(hours=config.times.DefaultDSTHours)

        self._latitude = float(latitude)
        self._longitude = float(longitude)
        self._timezone = timezone if timezone is not None else Duration()
        self._dst_start = dst_start if dst_start is not None else Duration()
        self._dst_end = dst_end if dst_end is not None else Duration()
        self._dst_amount = dst_amount
        self._zone: ZoneRecord | None = None

        self.catalog = catalog if catalog is not None else _DEFAULT_CATALOG
        self.solar_engine = solar_engine if solar_engine is not None else SolarEngine()
        self._cache_size = config.times.SunCacheSize
        self._sun_cache: dict[tuple, tuple[int, int, int, int]] = {}
        self._solar_cache: dict[tuple, Duration] = {}

    @classmethod
    def fromDegrees(
        cls,
        latitude: float,
        longitude: float,
        guess_zone: bool = True,
        catalog: ZoneCatalog | None = None,
    ) -> Location:
        """Create a location from degrees, optionally guessing its standard zone.

        When the guessed zone observes DST the window covers the whole year.
        """
        location = cls(float(deg2rad(latitude)), float(deg2rad(longitude)), catalog=catalog)
        if guess_zone and (record := location.guessZone(DST_SET_STANDARD)) is not None:
            location.setZone(record)
        return location

    def copy(self) -> Location:
        """Return an independent copy sharing the catalog and solar engine, with empty caches."""
        clone = Location(
            self._latitude,
            self._longitude,
            self._timezone,
            self._dst_start,
            self._dst_end,
            self._dst_amount,
            catalog=self.catalog,
            solar_engine=self.solar_engine,
        )
        clone._zone = self._zone
        return clone

    # Fields

    def _invalidate(self) -> None:
        self._sun_cache.clear()
        self._solar_cache.clear()

    @property
    def latitude(self) -> float:
        """``float``: latitude in radians."""
        return self._latitude

    @latitude.setter
    def latitude(self, value: float) -> None:
        self._latitude = float(value)
        self._invalidate()

    @property
    def longitude(self) -> float:
        """``float``: longitude in radians."""
        return self._longitude

    @longitude.setter
    def longitude(self, value: float) -> None:
        self._longitude = float(value)
        self._invalidate()

    @property
    def timezone(self) -> Duration:
        """:class:`.Duration`: raw offset from UTC, excluding DST."""
        return self._timezone

    @timezone.setter
    def timezone(self, value: Duration) -> None:
        self._timezone = value
        self._zone = None
        self._invalidate()

    @property
    def dst_start(self) -> Duration:
        """:class:`.Duration`: start of the DST window from the start of the year."""
        return self._dst_start

    @dst_start.setter
    def dst_start(self, value: Duration) -> None:
        self._dst_start = value
        self._zone = None
        self._invalidate()

    @property
    def dst_end(self) -> Duration:
        """:class:`.Duration`: end of the DST window from the start of the year, exclusive."""
        return self._dst_end

    @dst_end.setter
    def dst_end(self, value: Duration) -> None:
        self._dst_end = value
        self._zone = None
        self._invalidate()

    @property
    def dst_amount(self) -> Duration:
        """:class:`.Duration`: offset added while inside the DST window."""
        return self._dst_amount

    @dst_amount.setter
    def dst_amount(self, value: Duration) -> None:
        self._dst_amount = value
        self._zone = None
        self._invalidate()

    @property
    def zone(self) -> ZoneRecord | None:
        """:class:`.ZoneRecord`: record attached by :meth:`.setZone`, if any."""
        return self._zone

    # Timezone

    def dstEnabled(self) -> bool:
        """Return whether this location observes DST at all."""
        return self._dst_start != self._dst_end

    def inDSTWindow(self, into_year: Duration) -> bool:
        """Return whether a point `into_year` after January 1 is inside the DST window.

        The window is half-open. When ``dst_start > dst_end`` it wraps over the new year, which is
        how southern hemisphere summers are described.
        """
        if not self.dstEnabled():
            return False
        if self._dst_start < self._dst_end:
            return self._dst_start <= into_year < self._dst_end
        return into_year >= self._dst_start or into_year < self._dst_end

    def effectiveOffset(self, instant: Instant) -> Duration:
        """Return the UTC offset in effect at `instant`, including DST when it applies."""
        if self.inDSTWindow(instant.getTimeIntoYear(AS_LOCAL)):
            return self._timezone + self._dst_amount
        return self._timezone

    def guessZone(self, dst_set: int) -> ZoneRecord | None:
        """Guess the zone of this location's coordinates, see :meth:`.ZoneCatalog.guess`."""
        return self.catalog.guess(self._latitude, self._longitude, dst_set)

    def setZone(self, record: ZoneRecord) -> None:
        """Copy `record` into the raw fields and attach it.

        A record with a DST amount gets a DST window covering the whole year; any other record
        disables DST.
        """
        self._timezone = record.offset
        self._dst_amount = record.dst_amount
        self._dst_start = Duration()
        self._dst_end = Duration(days=366) if record.dst_amount != Duration() else Duration()
        self._zone = record
        self._invalidate()

    def currentZone(self, dst_set: int) -> tuple[ZoneRecord | None, bool]:
        """Return the zone describing this location and whether it is a hidden entry.

        The attached record wins; otherwise the raw offset is looked up in the tables of
        `dst_set`, or the daylight tables when DST is enabled.
        """
        if self._zone is not None:
            return self._zone, self.catalog.isHidden(self._zone)
        return self.catalog.current(self._timezone, self.dstEnabled(), dst_set)

    def zoneFromName(self, name: str, dst_set: int) -> ZoneRecord | None:
        return self.catalog.fromName(name, dst_set)

    def zoneFromId(self, zone_id: int) -> ZoneRecord | None:
        return self.catalog.fromId(zone_id)

    # Solar

    def _remember(self, cache: dict, key: tuple, value) -> None:
        if len(cache) >= self._cache_size:
            del cache[next(iter(cache))]
        cache[key] = value

    def _calcSun(self, year: int, month: int, day: int):
        return self.solar_engine.calcSun(
            year,
            month,
            day,
            float(rad2deg(self._latitude)),
            -float(rad2deg(self._longitude)),
        )

    def solarTimezone(self, instant: Instant) -> Duration:
        """Return the offset from UTC to mean solar time on the local day of `instant`.

        The offset is the negated distance of solar noon (UTC) from 12:00, so adding it to a UTC
        time puts solar noon at 12:00.
        """
        year = instant.getYear(AS_LOCAL)
        month = instant.getMonth(AS_LOCAL)
        day = instant.getDay(AS_LOCAL)
        key = (self._latitude, self._longitude, year, month, day)
        if (cached := self._solar_cache.get(key)) is not None:
            return cached

        noon = self._calcSun(year, month, day).noon
        day_shift = julianDayNumber(noon.year, noon.month, noon.day) - julianDayNumber(
            year,
            month,
            day,
        )
        noon_offset = Duration(day_shift, noon.hour - 12, noon.minute, noon.second)
        result = -noon_offset
        self._remember(self._solar_cache, key, result)
        return result

    def sunRiseSet(self, instant: Instant) -> SunEvent:
        """Return sunrise, sunset and solar noon for the apparent solar day of `instant`.

        Inside the polar circles a day without a sunrise or sunset reports the nearest one found
        by :class:`.SolarEngine`; elsewhere the missing event has value ``0`` and its flag set.
        """
        year = instant.getYear(AS_SOLAR)
        month = instant.getMonth(AS_SOLAR)
        day = instant.getDay(AS_SOLAR)
        key = (self._latitude, self._longitude, year, month, day)
        if (cached := self._sun_cache.get(key)) is None:
            result = self._calcSun(year, month, day)
            cached = (
                0 if result.flags & NO_SUNRISE else _clockValue(result.rise),
                0 if result.flags & NO_SUNSET else _clockValue(result.set),
                _clockValue(result.noon),
                result.flags,
            )
            self._remember(self._sun_cache, key, cached)

        rise, sunset, noon, flags = cached
        context = instant.context
        return SunEvent(
            Instant(rise, context),
            Instant(sunset, context),
            Instant(noon, context),
            flags,
        )

    # Regions

    def insideCanada(self) -> bool:
        return self.catalog.borders.pointInRegion(self._latitude, self._longitude, CANADA)

    def insideNewZealand(self) -> bool:
        return self.catalog.borders.pointInRegion(self._latitude, self._longitude, NEW_ZEALAND)

    def insideTasmania(self) -> bool:
        return self.catalog.borders.pointInRegion(self._latitude, self._longitude, TASMANIA)

    def insideAustraliaMainland(self) -> bool:
        return self.catalog.borders.pointInRegion(
            self._latitude,
            self._longitude,
            AUSTRALIA_MAINLAND,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Location):
            return NotImplemented
        return (
            self._latitude == other._latitude
            and self._longitude == other._longitude
            and self._timezone == other._timezone
            and self._dst_start == other._dst_start
            and self._dst_end == other._dst_end
            and self._dst_amount == other._dst_amount
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"Location(latitude={self._latitude!r}, longitude={self._longitude!r}, "
            f"timezone={self._timezone!r}, dst_start={self._dst_start!r}, "
            f"dst_end={self._dst_end!r}, dst_amount={self._dst_amount!r})"
        )


def _clockValue(clock: ClockTime) -> int:
    """Microseconds since the epoch of a UTC :class:`.ClockTime`."""
    return Instant.fromFields(
        clock.year,
        clock.month,
        clock.day,
        clock.hour,
        clock.minute,
        clock.second,
        None,
    ).getTotalMicroSeconds()
