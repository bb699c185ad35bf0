"""Legacy little-endian binary archive of durations, instants and locations.

Durations and instants are written behind a marker word so that older archives, which stored whole
seconds, can still be read:

- duration: ``int64`` marker and ``int64`` microseconds, formerly ``int64`` seconds
- instant: ``uint64`` marker and ``uint64`` microseconds since 1600, formerly ``uint64`` seconds
  since 1900 with all ones meaning unset

Locations start with the ``int16`` tag ``-1`` followed by an ``int16`` version:

- version 1: latitude, longitude, ``int32`` offset seconds, ``int16`` spheroid
- version 2: version 1 followed by ``int32`` DST start, end and amount seconds
- version 3: latitude, longitude, duration offset, ``int16`` spheroid, duration DST start, end and
  amount
- version 4: version 3 without the spheroid
- version 5: version 4 followed by the ``uint32`` id of the attached zone, ``0`` for none

Records written before versioning start directly with the latitude, whose first two ``int16``
words are never ``-1, n`` for a valid latitude, then the longitude and a duration offset.
"""

from __future__ import annotations

# Standard Library Imports
from io import BytesIO
from struct import calcsize, pack, unpack
from typing import TYPE_CHECKING, BinaryIO, NamedTuple

# Local Imports
from ..common.exceptions import ArchiveFormatError, ArchiveVersionError
from ..common.logger import worldtimeLogDebug, worldtimeLogError
from ..times.constants import EPOCH_1900, UNSET_VALUE, US_PER_SECOND
from ..times.duration import Duration
from ..times.instant import Instant
from ..times.location import Location

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Callable

    # Local Imports
    from ..times.context import TimeContext
    from ..zones.catalog import ZoneCatalog


DURATION_MARKER: int = 0x7FFEEFFCCFFAAFFD
"""``int``: marks a duration stored in microseconds."""

INSTANT_MARKER: int = 0x7FFEEDDCCBBAA009
"""``int``: marks an instant stored in microseconds since 1600."""

LOCATION_TAG: int = -1
"""``int``: first ``int16`` of every versioned location record."""

LOCATION_VERSION: int = 5
"""``int``: location version written by :class:`.ArchiveWriter`."""


class LocationFields(NamedTuple):
    """Normalized content of a location record, whatever version it was read from."""

    latitude: float
    longitude: float
    timezone: Duration
    dst_start: Duration
    dst_end: Duration
    dst_amount: Duration
    zone_id: int = 0


class ArchiveReader:
    """Reads archive records from a binary stream."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def _read(self, fmt: str) -> tuple:
        fmt = "<" + fmt
        size = calcsize(fmt)
        data = self.stream.read(size)
        if len(data) != size:
            msg = f"Archive ended after {len(data)} of {size} bytes"
            worldtimeLogError(msg)
            raise ArchiveFormatError(msg)
        return unpack(fmt, data)

    def readInt16(self) -> int:
        return self._read("h")[0]

    def readInt32(self) -> int:
        return self._read("i")[0]

    def readUInt32(self) -> int:
        return self._read("I")[0]

    def readInt64(self) -> int:
        return self._read("q")[0]

    def readUInt64(self) -> int:
        return self._read("Q")[0]

    def readDouble(self) -> float:
        return self._read("d")[0]

    def readDuration(self) -> Duration:
        """Read a duration, scaling legacy whole seconds to microseconds."""
        value = self.readInt64()
        if value == DURATION_MARKER:
            return Duration.fromMicroSeconds(self.readInt64())
        return Duration.fromMicroSeconds(value * US_PER_SECOND)

    def readInstant(self, context: TimeContext | None = None) -> Instant:
        """Read an instant, converting legacy seconds since 1900 to microseconds since 1600."""
        value = self.readUInt64()
        if value == INSTANT_MARKER:
            return Instant(self.readUInt64(), context)
        if value == UNSET_VALUE:
            return Instant(UNSET_VALUE, context)
        return Instant(value * US_PER_SECOND + EPOCH_1900, context)

    def readLocationFields(self) -> LocationFields:
        """Read a location record of any version into its normalized fields.

        Raises:
            ArchiveVersionError: when the record carries an unknown version tag.
        """
        first, second = self.readInt16(), self.readInt16()
        if first != LOCATION_TAG:
            return _decodeUnversioned(self, first, second)

        if (decoder := _LOCATION_DECODERS.get(second)) is None:
            msg = f"Unknown location archive version: {second}"
            worldtimeLogError(msg)
            raise ArchiveVersionError(msg)
        worldtimeLogDebug(f"Decoding location archive version {second}")
        return decoder(self)

    def readLocation(self, catalog: ZoneCatalog | None = None) -> Location:
        """Read a location record; a stored zone id is re-attached when `catalog` resolves it."""
        fields = self.readLocationFields()
        location = Location(
            fields.latitude,
            fields.longitude,
            timezone=fields.timezone,
            dst_start=fields.dst_start,
            dst_end=fields.dst_end,
            dst_amount=fields.dst_amount,
            catalog=catalog,
        )
        if fields.zone_id and (zone := location.zoneFromId(fields.zone_id)) is not None:
            location.setZone(zone)
        return location


class ArchiveWriter:
    """Writes archive records, always in the current layouts, to a binary stream."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def _write(self, fmt: str, *values) -> None:
        self.stream.write(pack("<" + fmt, *values))

    def writeDuration(self, duration: Duration) -> None:
        self._write("qq", DURATION_MARKER, duration.getTotalMicroSeconds())

    def writeInstant(self, instant: Instant) -> None:
        self._write("QQ", INSTANT_MARKER, instant.value)

    def writeLocation(self, location: Location) -> None:
        """Write `location` as a version 5 record."""
        self._write("hh", LOCATION_TAG, LOCATION_VERSION)
        self._write("dd", location.latitude, location.longitude)
        self.writeDuration(location.timezone)
        self.writeDuration(location.dst_start)
        self.writeDuration(location.dst_end)
        self.writeDuration(location.dst_amount)
        self._write("I", location.zone.id if location.zone is not None else 0)


# Location decoders, one per version


def _decodeUnversioned(reader: ArchiveReader, first: int, second: int) -> LocationFields:
    # The two words already read are the start of the latitude
    third, fourth = reader.readInt16(), reader.readInt16()
    latitude = unpack("<d", pack("<4h", first, second, third, fourth))[0]
    longitude = reader.readDouble()
    timezone = reader.readDuration()
    return LocationFields(latitude, longitude, timezone, Duration(), Duration(), Duration())


def _decodeV1(reader: ArchiveReader) -> LocationFields:
    latitude, longitude = reader.readDouble(), reader.readDouble()
    timezone = Duration(seconds=reader.readInt32())
    reader.readInt16()  # spheroid
    return LocationFields(latitude, longitude, timezone, Duration(), Duration(), Duration())


def _decodeV2(reader: ArchiveReader) -> LocationFields:
    latitude, longitude = reader.readDouble(), reader.readDouble()
    timezone = Duration(seconds=reader.readInt32())
    reader.readInt16()  # spheroid
    start = Duration(seconds=reader.readInt32())
    end = Duration(seconds=reader.readInt32())
    amount = Duration(seconds=reader.readInt32())
    return LocationFields(latitude, longitude, timezone, start, end, amount)


def _decodeV3(reader: ArchiveReader) -> LocationFields:
    latitude, longitude = reader.readDouble(), reader.readDouble()
    timezone = reader.readDuration()
    reader.readInt16()  # spheroid
    start, end, amount = reader.readDuration(), reader.readDuration(), reader.readDuration()
    return LocationFields(latitude, longitude, timezone, start, end, amount)


def _decodeV4(reader: ArchiveReader) -> LocationFields:
    latitude, longitude = reader.readDouble(), reader.readDouble()
    timezone = reader.readDuration()
    start, end, amount = reader.readDuration(), reader.readDuration(), reader.readDuration()
    return LocationFields(latitude, longitude, timezone, start, end, amount)


def _decodeV5(reader: ArchiveReader) -> LocationFields:
    fields = _decodeV4(reader)
    return fields._replace(zone_id=reader.readUInt32())


_LOCATION_DECODERS: dict[int, Callable[[ArchiveReader], LocationFields]] = {
    1: _decodeV1,
    2: _decodeV2,
    3: _decodeV3,
    4: _decodeV4,
    5: _decodeV5,
}


# Byte-string helpers


def dumpDuration(duration: Duration) -> bytes:
    stream = BytesIO()
    ArchiveWriter(stream).writeDuration(duration)
    return stream.getvalue()


def loadDuration(data: bytes) -> Duration:
    return ArchiveReader(BytesIO(data)).readDuration()


def dumpInstant(instant: Instant) -> bytes:
    stream = BytesIO()
    ArchiveWriter(stream).writeInstant(instant)
    return stream.getvalue()


def loadInstant(data: bytes, context: TimeContext | None = None) -> Instant:
    return ArchiveReader(BytesIO(data)).readInstant(context)


def dumpLocation(location: Location) -> bytes:
    """Return `location` as a version 5 record."""
    stream = BytesIO()
    ArchiveWriter(stream).writeLocation(location)
    return stream.getvalue()


def loadLocation(data: bytes, catalog: ZoneCatalog | None = None) -> Location:
    """Decode a location record of any version."""
    return ArchiveReader(BytesIO(data)).readLocation(catalog)
