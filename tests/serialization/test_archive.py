from __future__ import annotations

# Standard Library Imports
from io import BytesIO
from struct import pack
from typing import TYPE_CHECKING

# Third Party Imports
import pytest

# WORLDTIME Imports
from worldtime.common.exceptions import ArchiveFormatError, ArchiveVersionError
from worldtime.serialization.archive import (
    DURATION_MARKER,
    INSTANT_MARKER,
    LOCATION_TAG,
    ArchiveReader,
    ArchiveWriter,
    dumpDuration,
    dumpInstant,
    dumpLocation,
    loadDuration,
    loadInstant,
    loadLocation,
)
from worldtime.times.constants import EPOCH_1900, UNSET_VALUE
from worldtime.times.duration import Duration
from worldtime.times.instant import Instant
from worldtime.times.location import Location
from worldtime.zones.catalog import DAYLIGHT_ZONES, STANDARD_ZONES

# Type Checking Imports
if TYPE_CHECKING:
    # WORLDTIME Imports
    from worldtime.times.context import TimeContext
    from worldtime.zones.catalog import ZoneCatalog


LATITUDE = 0.5
LONGITUDE = -1.75


def durationBytes(seconds: int) -> bytes:
    """Return a duration in the current marker layout."""
    return pack("<qq", DURATION_MARKER, seconds * 1_000_000)


def reader(data: bytes) -> ArchiveReader:
    return ArchiveReader(BytesIO(data))


class TestDurationArchive:
    """Test reading and writing archived durations."""

    def testMarkerLayout(self):
        """Test that durations are written behind the marker in microseconds."""
        span = Duration(hours=1, microseconds=5)
        assert dumpDuration(span) == pack("<qq", DURATION_MARKER, 3600_000_005)
        assert loadDuration(dumpDuration(span)) == span

    @pytest.mark.parametrize("seconds", [0, 90, -3600])
    def testLegacySeconds(self, seconds: int):
        """Test that a value without the marker is read as whole seconds."""
        assert loadDuration(pack("<q", seconds)) == Duration(seconds=seconds)

    def testTruncated(self):
        """Test that a marker without its value is a format error."""
        with pytest.raises(ArchiveFormatError):
            loadDuration(pack("<q", DURATION_MARKER))


class TestInstantArchive:
    """Test reading and writing archived instants."""

    def testMarkerLayout(self, utc_context: TimeContext):
        """Test that instants are written behind the marker as microseconds since 1600."""
        instant = Instant.fromFields(2018, 1, 20, 12, 31, 0, utc_context, microsecond=7)
        data = dumpInstant(instant)
        assert data == pack("<QQ", INSTANT_MARKER, instant.value)
        loaded = loadInstant(data, utc_context)
        assert loaded == instant
        assert loaded.context is utc_context

    def testLegacySeconds(self):
        """Test that legacy instants count whole seconds from 1900."""
        assert loadInstant(pack("<Q", 0)).value == EPOCH_1900
        expected = Instant.fromFields(1900, 1, 2, 0, 0, 1, None)
        assert loadInstant(pack("<Q", 86401)).value == expected.value

    def testUnset(self):
        """Test that the unset value survives both layouts."""
        assert not loadInstant(pack("<Q", UNSET_VALUE)).isValid()
        assert not loadInstant(dumpInstant(Instant.unset())).isValid()

    def testTruncated(self):
        """Test that a short stream is a format error."""
        with pytest.raises(ArchiveFormatError, match="4 of 8"):
            loadInstant(b"\x00" * 4)


class TestLocationArchive:
    """Test reading archived locations of every version."""

    def testVersion1(self):
        """Test offsets stored as whole seconds, followed by a spheroid."""
        data = pack("<hhddih", LOCATION_TAG, 1, LATITUDE, LONGITUDE, -25200, 3)
        fields = reader(data).readLocationFields()
        assert fields.latitude == LATITUDE
        assert fields.longitude == LONGITUDE
        assert fields.timezone == Duration(hours=-7)
        assert fields.dst_start == fields.dst_end == fields.dst_amount == Duration()
        assert fields.zone_id == 0

    def testVersion2(self):
        """Test DST fields stored as whole seconds after the spheroid."""
        data = pack("<hhddih", LOCATION_TAG, 2, LATITUDE, LONGITUDE, -25200, 3)
        data += pack("<iii", 86400, 172800, 3600)
        location = loadLocation(data)
        assert location.timezone == Duration(hours=-7)
        assert location.dst_start == Duration(days=1)
        assert location.dst_end == Duration(days=2)
        assert location.dst_amount == Duration(hours=1)
        assert location.zone is None

    def testVersion3(self):
        """Test durations with a spheroid between the offset and the DST fields."""
        data = (
            pack("<hhdd", LOCATION_TAG, 3, LATITUDE, LONGITUDE)
            + durationBytes(19800)
            + pack("<h", 0)
            + durationBytes(0)
            + durationBytes(0)
            + pack("<q", 1800)
        )
        fields = reader(data).readLocationFields()
        assert fields.timezone == Duration(hours=5, minutes=30)
        assert fields.dst_amount == Duration(minutes=30)

    def testVersion4(self):
        """Test durations without a spheroid."""
        data = (
            pack("<hhdd", LOCATION_TAG, 4, LATITUDE, LONGITUDE)
            + durationBytes(-12600)
            + durationBytes(100 * 86400)
            + durationBytes(300 * 86400)
            + durationBytes(3600)
        )
        location = loadLocation(data)
        assert location.timezone == Duration(hours=-3, minutes=-30)
        assert location.dst_start == Duration(days=100)
        assert location.dst_end == Duration(days=300)
        assert location.dstEnabled()

    def testVersion5(self):
        """Test that a stored zone id is re-attached."""
        mdt = DAYLIGHT_ZONES[12]
        data = (
            pack("<hhdd", LOCATION_TAG, 5, LATITUDE, LONGITUDE)
            + durationBytes(-25200)
            + durationBytes(0)
            + durationBytes(366 * 86400)
            + durationBytes(3600)
            + pack("<I", mdt.id)
        )
        location = loadLocation(data)
        assert location.zone is mdt
        assert location.dst_end == Duration(days=366)

    def testVersion5UnknownZone(self):
        """Test that an unknown zone id leaves the raw fields in place."""
        data = (
            pack("<hhdd", LOCATION_TAG, 5, LATITUDE, LONGITUDE)
            + durationBytes(3600)
            + durationBytes(0)
            + durationBytes(0)
            + durationBytes(0)
            + pack("<I", 0x10FFFF)
        )
        location = loadLocation(data)
        assert location.zone is None
        assert location.timezone == Duration(hours=1)

    def testUnversioned(self):
        """Test records written before the version tag existed."""
        data = pack("<dd", LATITUDE, LONGITUDE) + pack("<q", 7200)
        fields = reader(data).readLocationFields()
        assert fields.latitude == LATITUDE
        assert fields.longitude == LONGITUDE
        assert fields.timezone == Duration(hours=2)
        assert fields.dst_amount == Duration()

    def testUnknownVersion(self):
        """Test that an unknown version tag is rejected."""
        data = pack("<hhdd", LOCATION_TAG, 6, LATITUDE, LONGITUDE)
        with pytest.raises(ArchiveVersionError, match="6"):
            loadLocation(data)

    def testTruncated(self):
        """Test that a record cut short is a format error."""
        data = dumpLocation(Location(LATITUDE, LONGITUDE))
        with pytest.raises(ArchiveFormatError):
            loadLocation(data[:-2])


class TestArchiveWriter:
    """Test that written archives read back."""

    def testLocationRoundTrip(self):
        """Test that the current layout keeps every field and the attached zone."""
        location = Location(LATITUDE, LONGITUDE)
        location.setZone(STANDARD_ZONES[12])
        data = dumpLocation(location)
        assert data[:4] == pack("<hh", LOCATION_TAG, 5)

        loaded = loadLocation(data)
        assert loaded == location
        assert loaded.zone is location.zone

    def testDynamicZone(self, database_catalog: ZoneCatalog):
        """Test that a dynamic zone is re-attached through the catalog that issued it."""
        location = Location(LATITUDE, LONGITUDE, catalog=database_catalog)
        location.setZone(database_catalog.fromName("America/Edmonton", 0))
        data = dumpLocation(location)
        assert loadLocation(data, database_catalog).zone is location.zone
        assert loadLocation(data).zone is None

    def testStream(self, utc_context: TimeContext):
        """Test several records sharing one stream."""
        stream = BytesIO()
        writer = ArchiveWriter(stream)
        instant = Instant.fromFields(2020, 2, 29, 23, 59, 59, utc_context)
        writer.writeDuration(Duration(days=2))
        writer.writeInstant(instant)
        writer.writeLocation(Location(LATITUDE, LONGITUDE, timezone=Duration(hours=9)))

        stream.seek(0)
        archive = ArchiveReader(stream)
        assert archive.readDuration() == Duration(days=2)
        assert archive.readInstant(utc_context) == instant
        assert archive.readLocation().timezone == Duration(hours=9)
        assert stream.read() == b""
