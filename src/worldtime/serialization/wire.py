"""Structured records exchanged with other services and the :class:`.TimeSerializer` codec.

Times travel as ISO-8601 text plus optional zone hints, durations as legacy duration text, and
locations as a coordinate plus one of three zone descriptions:

- version 1: ``timezone_index``, a catalog id
- version 2: ``name`` and ``daylight``, an IANA name or zone code
- either version: ``offset``/``dst_start``/``dst_end``/``dst_amount``, an explicit DST quad in
  ISO-8601 duration form, used when no catalog entry describes the location

Every decoder has a strict form that raises :class:`.WireDecodeError` on the first bad field, and a
``...WithDiagnostics`` form that records a :class:`.ValidationEntry` for each bad field, skips it,
and returns ``None`` only when nothing usable is left.
"""

from __future__ import annotations

# Standard Library Imports
from typing import TYPE_CHECKING, NamedTuple

# Third Party Imports
from pydantic import BaseModel

# Local Imports
from ..common.exceptions import WireDecodeError
from ..common.logger import worldtimeLogError
from ..times.constants import DAY, EXCLUDE_SECONDS, INCLUDE_USECS, ISO8601, YEAR
from ..times.context import TimeContext
from ..times.duration import Duration
from ..times.instant import Instant
from ..times.location import Location
from ..zones.catalog import ZoneCatalog
from ..zones.records import DST_SET_DAYLIGHT, DST_SET_STANDARD, isDynamic
from .diagnostics import Severity

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Callable

    # Local Imports
    from ..zones.records import ZoneRecord
    from .diagnostics import ValidationCollector

    Reporter = Callable[[str, object, str, Severity], None]


WIRE_VERSIONS: tuple[int, ...] = (1, 2)
"""``tuple``: location record versions understood by :class:`.TimeSerializer`."""

_NO_OFFSET = Duration.fromMicroSeconds(-1)
_FULL_YEAR = Duration(days=366)
_OFFSET_CHARACTERS = frozenset("0123456789:+-")


class TimeRecord(BaseModel):
    """Structured form of an :class:`.Instant`."""

    time: str
    """``str``: ISO-8601 time with its UTC offset, e.g. ``"2018-01-20T12:31:00-06:00"``."""

    timezone: str | None = None
    """``str``: zone code or name (``"MDT"``), ``"UTC"``, or a raw ``HH:MM`` offset."""

    timezone_id: int | None = None
    """``int``: catalog id of the zone, preferred over :attr:`.timezone` when both are present."""

    daylight: str | None = None
    """``str``: daylight amount as ``HH:MM``, or ``"LDT"``/``"D"`` for one hour of DST."""


class DurationRecord(BaseModel):
    """Structured form of a :class:`.Duration`."""

    time: str
    """``str``: legacy duration text, e.g. ``"1 year 3 days 01:00:00.000000"``."""


class LocationRecord(BaseModel):
    """Structured form of a :class:`.Location`."""

    version: int = 2
    """``int``: record version, one of :data:`.WIRE_VERSIONS`."""

    latitude: float
    """``float``: latitude in radians."""

    longitude: float
    """``float``: longitude in radians."""

    timezone_index: int | None = None
    """``int``: catalog id of the zone (version 1)."""

    name: str | None = None
    """``str``: IANA name or zone code (version 2)."""

    daylight: bool | None = None
    """``bool``: whether :attr:`.name` refers to the daylight variant (version 2)."""

    offset: str | None = None
    dst_start: str | None = None
    dst_end: str | None = None
    dst_amount: str | None = None


class DecodedTime(NamedTuple):
    """Outcome of decoding a :class:`.TimeRecord`."""

    time: Instant
    """:class:`.Instant`: the decoded point in time."""

    offset: Duration
    """:class:`.Duration`: standard offset of the zone the record was written in."""

    dst: Duration
    """:class:`.Duration`: daylight amount in effect when the record was written."""

    @property
    def effectiveOffset(self) -> Duration:
        """:class:`.Duration`: total offset from UTC, standard plus daylight."""
        return self.offset + self.dst

    def toLocation(self, latitude: float = 1000.0, longitude: float = 1000.0) -> Location:
        """Build a :class:`.Location` observing the decoded offset all year round."""
        return Location(
            latitude,
            longitude,
            timezone=self.offset,
            dst_start=Duration(),
            dst_end=_FULL_YEAR if self.dst else Duration(),
            dst_amount=self.dst,
        )


def _strictReporter(field: str, value: object, message: str, severity: Severity) -> None:
    # Any bad field is fatal in strict mode
    worldtimeLogError(f"Unable to decode {field}={value!r}: {message}")
    raise WireDecodeError(field, message)


def _collectingReporter(collector: ValidationCollector, path: str) -> Reporter:
    def report(field: str, value: object, message: str, severity: Severity) -> None:
        collector.add(path, field, value, message, severity)

    return report


class TimeSerializer:
    """Converts between the time types and their structured records.

    Zone names and ids are resolved through `catalog`, so a catalog built with a
    :class:`.ZoneDatabase` also understands IANA names and dynamic zone ids.
    """

    def __init__(self, catalog: ZoneCatalog | None = None):
        self.catalog = catalog if catalog is not None else ZoneCatalog()

    # Time

    def serializeTime(self, instant: Instant) -> TimeRecord:
        """Describe `instant` as ISO-8601 local time plus the zone in effect at that instant.

        Outside the DST window of its location a daylight zone is written as its standard variant,
        and a raw offset is written without ``daylight``.
        """
        record = TimeRecord(time=instant.toString(ISO8601))
        location = instant.location
        if location is None:
            return record

        if not location.dstEnabled() and location.timezone == Duration():
            record.timezone = "UTC"
            return record

        # Zone and daylight describe the offset in effect at the instant, not the whole year
        in_dst = location.effectiveOffset(instant) != location.timezone
        zone, _ = location.currentZone(DST_SET_STANDARD)
        if zone is not None and zone.hasDST and not in_dst:
            zone = self.catalog.toStandard(zone)
        if zone is not None:
            record.timezone = zone.code
            record.timezone_id = zone.id
        else:
            record.timezone = location.timezone.toString(EXCLUDE_SECONDS)
            if in_dst:
                record.daylight = location.dst_amount.toString(EXCLUDE_SECONDS)
        return record

    def deserializeTime(
        self,
        record: TimeRecord,
        context: TimeContext | None = None,
    ) -> DecodedTime:
        """Decode `record`, raising :class:`.WireDecodeError` on the first bad field.

        Args:
            record (:class:`.TimeRecord`): record to decode.
            context (:class:`.TimeContext`, optional): context of the returned instant.

        Returns:
            :class:`.DecodedTime`: the UTC instant and the zone offsets it was written in.
        """
        return self._decodeTime(record, context, _strictReporter)

    def deserializeTimeWithDiagnostics(
        self,
        record: TimeRecord,
        collector: ValidationCollector,
        context: TimeContext | None = None,
        path: str = "time",
    ) -> DecodedTime | None:
        """Decode `record`, collecting problems instead of raising.

        Bad zone hints are skipped with a warning. Returns ``None`` only when ``time`` itself
        cannot be parsed.
        """
        return self._decodeTime(record, context, _collectingReporter(collector, path))

    def _decodeTime(
        self,
        record: TimeRecord,
        context: TimeContext | None,
        report: Reporter,
    ) -> DecodedTime | None:
        utc = Location(timezone=Duration(), dst_amount=Duration(), catalog=self.catalog)
        base = TimeContext(utc)
        embedded = Location(timezone=_NO_OFFSET, dst_amount=Duration(), catalog=self.catalog)
        parsed = Instant(0, base).parseDateTime(record.time, ISO8601, embedded)
        if parsed is None:
            report("time", record.time, "not an ISO-8601 time", Severity.ERROR)
            return None

        has_offset = embedded.timezone != _NO_OFFSET
        offset = embedded.timezone if has_offset else Duration()
        dst = Duration()

        daylight, daylight_flag = self._decodeDaylight(record.daylight, report)

        zone: ZoneRecord | None = None
        if record.timezone_id is not None:
            zone = self.catalog.fromId(record.timezone_id)
            if zone is None:
                report("timezone_id", record.timezone_id, "unknown zone id", Severity.WARNING)

        if zone is None and record.timezone is not None:
            if set(record.timezone) <= _OFFSET_CHARACTERS:
                result = Duration.parseTime(record.timezone)
                if result.count:
                    offset = result.duration
                    dst = daylight
                else:
                    report("timezone", record.timezone, "not an offset", Severity.WARNING)
            else:
                zone = self._zoneFromName(record.timezone, daylight_flag)
                if zone is None:
                    if daylight:
                        # Keep the total offset written in the time string
                        dst = daylight
                        offset = offset - dst
                    else:
                        report("timezone", record.timezone, "unknown zone", Severity.WARNING)

        if zone is not None:
            offset = zone.offset
            if daylight:
                dst = daylight
                offset = offset + (zone.dst_amount - daylight)
            elif zone.dst_amount:
                dst = zone.dst_amount

        time = parsed
        if not has_offset and (offset or dst):
            # The time string was local time of the zone
            time = parsed - (offset + dst)
        return DecodedTime(time.withContext(context), offset, dst)

    @staticmethod
    def _decodeDaylight(text: str | None, report: Reporter) -> tuple[Duration, int]:
        """Return the daylight amount and a flag: -1 unknown, 0 none, 1 one hour, 2 other."""
        if text is None:
            return Duration(), -1
        if any(char.isdigit() for char in text):
            result = Duration.parseTime(text)
            if not result.count:
                report("daylight", text, "not a duration", Severity.WARNING)
                return Duration(), -1
            seconds = result.duration.getTotalSeconds()
            if seconds == 0:
                return Duration(), 0
            return result.duration, 1 if abs(seconds) == 3600 else 2
        if text.casefold() in ("ldt", "d"):
            return Duration(hours=1), 1
        if text.casefold() in ("lst", "s"):
            return Duration(), 0
        report("daylight", text, "unknown daylight indicator", Severity.WARNING)
        return Duration(), -1

    def _zoneFromName(self, name: str, daylight_flag: int) -> ZoneRecord | None:
        if daylight_flag in (1, 2):
            return self.catalog.fromName(name, DST_SET_DAYLIGHT)
        zone = self.catalog.fromName(name, DST_SET_STANDARD)
        if zone is None and daylight_flag == -1:
            zone = self.catalog.fromName(name, DST_SET_DAYLIGHT)
        return zone

    # Duration

    @staticmethod
    def serializeDuration(duration: Duration) -> DurationRecord:
        return DurationRecord(time=duration.toString(YEAR | DAY | INCLUDE_USECS))

    def deserializeDuration(self, record: DurationRecord) -> Duration:
        """Decode `record`, raising :class:`.WireDecodeError` when the text is malformed."""
        return self._decodeDuration(record, _strictReporter)

    def deserializeDurationWithDiagnostics(
        self,
        record: DurationRecord,
        collector: ValidationCollector,
        path: str = "duration",
    ) -> Duration | None:
        return self._decodeDuration(record, _collectingReporter(collector, path))

    @staticmethod
    def _decodeDuration(record: DurationRecord, report: Reporter) -> Duration | None:
        result = Duration.parseTime(record.time)
        if not result.count:
            report("time", record.time, "not a duration", Severity.ERROR)
            return None
        return result.duration

    # Location

    def serializeLocation(self, location: Location, version: int = 2) -> LocationRecord:
        """Describe `location` by zone when one is attached, and by its DST quad otherwise.

        Raises:
            ValueError: when `version` is not one of :data:`.WIRE_VERSIONS`.
        """
        if version not in WIRE_VERSIONS:
            msg = f"Unsupported location record version: {version}"
            worldtimeLogError(msg)
            raise ValueError(msg)

        record = LocationRecord(
            version=version,
            latitude=location.latitude,
            longitude=location.longitude,
        )
        zone = location.zone
        if zone is not None and version == 1 and not isDynamic(zone.id):
            record.timezone_index = zone.id
            return record
        if zone is not None and version == 2:
            if (paired := self.catalog.upgrade(zone.id)) is not None:
                record.name, record.daylight = paired
            else:
                record.name = zone.name if isDynamic(zone.id) else zone.code
                record.daylight = zone.hasDST
            return record

        record.offset = location.timezone.toISO8601()
        record.dst_start = location.dst_start.toISO8601()
        record.dst_end = location.dst_end.toISO8601()
        record.dst_amount = location.dst_amount.toISO8601()
        return record

    def deserializeLocation(self, record: LocationRecord) -> Location:
        """Decode `record`, raising :class:`.WireDecodeError` on the first bad field."""
        return self._decodeLocation(record, _strictReporter)

    def deserializeLocationWithDiagnostics(
        self,
        record: LocationRecord,
        collector: ValidationCollector,
        path: str = "location",
    ) -> Location | None:
        """Decode `record`, collecting problems instead of raising.

        An unresolvable zone falls back on the DST quad when one is present. Returns ``None``
        when the version is unknown.
        """
        return self._decodeLocation(record, _collectingReporter(collector, path))

    def _decodeLocation(self, record: LocationRecord, report: Reporter) -> Location | None:
        if record.version not in WIRE_VERSIONS:
            report("version", record.version, "unsupported location version", Severity.ERROR)
            return None

        location = Location(record.latitude, record.longitude, catalog=self.catalog)

        zone: ZoneRecord | None = None
        if record.timezone_index is not None:
            zone = self.catalog.fromId(record.timezone_index)
            if zone is None:
                report("timezone_index", record.timezone_index, "unknown zone id", Severity.WARNING)
        elif record.name is not None:
            zone = self._zoneFromWireName(record.name, bool(record.daylight))
            if zone is None:
                report("name", record.name, "unknown zone", Severity.WARNING)

        if zone is not None:
            location.setZone(zone)
            return location

        quad = {}
        for field in ("offset", "dst_start", "dst_end", "dst_amount"):
            text = getattr(record, field)
            if text is None:
                continue
            result = Duration.parseTime(text)
            if not result.count:
                report(field, text, "not a duration", Severity.WARNING)
                continue
            quad[field] = result.duration

        if "offset" in quad:
            location.timezone = quad["offset"]
        location.dst_start = quad.get("dst_start", Duration())
        location.dst_end = quad.get("dst_end", Duration())
        location.dst_amount = quad.get("dst_amount", Duration())
        return location

    def _zoneFromWireName(self, name: str, daylight: bool) -> ZoneRecord | None:
        if (zone_id := self.catalog.downgrade(name, daylight)) is not None:
            return self.catalog.fromId(zone_id)
        return self.catalog.fromName(name, DST_SET_DAYLIGHT if daylight else DST_SET_STANDARD)
