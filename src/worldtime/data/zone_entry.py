"""Defines the :class:`.ZoneEntry` data table class."""

from __future__ import annotations

# Standard Library Imports
from typing import TYPE_CHECKING

# Third Party Imports
from sqlalchemy import BigInteger, Column, Integer, String

# Local Imports
from ..times.duration import Duration
from ..zones.records import ZoneRecord
from .table_base import Base, _DataMixin

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from typing_extensions import Self


class ZoneEntry(Base, _DataMixin):
    """Zone records resolved from the IANA database at runtime."""

    __tablename__ = "dynamic_zones"

    id = Column(Integer, primary_key=True, autoincrement=False)  # noqa: A003
    """``int``: dynamic zone id, see :data:`.DYNAMIC_ID`."""

    iana_name = Column(String(128), nullable=False, index=True)
    """``str``: IANA key the record was probed from, e.g. ``"America/Edmonton"``."""

    code = Column(String(16), nullable=False)
    """``str``: abbreviation reported by the IANA database, e.g. ``"MST"``."""

    offset_us = Column(BigInteger, nullable=False)
    """``int``: standard offset from UTC in microseconds."""

    dst_us = Column(BigInteger, nullable=False)
    """``int``: daylight saving amount in microseconds."""

    MUTABLE_COLUMN_NAMES = (
        "iana_name",
        "code",
        "offset_us",
        "dst_us",
    )

    @classmethod
    def fromZoneRecord(cls, record: ZoneRecord) -> Self:
        """Build a table row mirroring `record`."""
        return cls(
            id=record.id,
            iana_name=record.name,
            code=record.code,
            offset_us=record.offset.getTotalMicroSeconds(),
            dst_us=record.dst_amount.getTotalMicroSeconds(),
        )

    def toZoneRecord(self) -> ZoneRecord:
        """Rebuild the :class:`.ZoneRecord` stored in this row."""
        return ZoneRecord(
            offset=Duration.fromMicroSeconds(self.offset_us),
            dst_amount=Duration.fromMicroSeconds(self.dst_us),
            code=self.code,
            name=self.iana_name,
            id=self.id,
        )
