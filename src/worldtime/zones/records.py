"""Defines the immutable :class:`.ZoneRecord` and the id scheme that partitions the zone tables."""

from __future__ import annotations

# Standard Library Imports
from dataclasses import dataclass
from typing import TYPE_CHECKING

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from typing import Final

    # Local Imports
    from ..times.duration import Duration


STANDARD_ID: Final[int] = 0x10000
"""``int``: id bit of the standard time tables."""

DAYLIGHT_ID: Final[int] = 0x20000
"""``int``: id bit of the daylight time tables."""

MILITARY_ID: Final[int] = 0x40000
"""``int``: id bit of the military time table."""

DYNAMIC_ID: Final[int] = 0x80000
"""``int``: id bit of records created at runtime by a :class:`.ZoneDatabase`."""

INDEX_MASK: Final[int] = 0xFFFF

# Zone set selectors
DST_SET_STANDARD: Final[int] = 0
DST_SET_DAYLIGHT: Final[int] = 1
DST_SET_MILITARY: Final[int] = -1


def makeId(table: int, index: int) -> int:
    """Combine a table bit with a table index."""
    return table | index


def isStandard(zone_id: int) -> bool:
    return bool(zone_id & STANDARD_ID)


def isDaylight(zone_id: int) -> bool:
    return bool(zone_id & DAYLIGHT_ID)


def isMilitary(zone_id: int) -> bool:
    return bool(zone_id & MILITARY_ID)


def isDynamic(zone_id: int) -> bool:
    return bool(zone_id & DYNAMIC_ID)


@dataclass(frozen=True)
class ZoneRecord:
    """Named timezone entry: a UTC offset plus the amount of daylight saving it implies."""

    offset: Duration
    """:class:`.Duration`: standard offset from UTC."""

    dst_amount: Duration
    """:class:`.Duration`: daylight saving amount, zero for standard zones."""

    code: str
    """``str``: short code, e.g. ``"MST"``."""

    name: str
    """``str``: descriptive name, e.g. ``"Mountain Standard Time"``."""

    id: int  # noqa: A003
    """``int``: stable id, the table bit OR'ed with the table index."""

    region: str | None = None
    """``str``, optional: region the zone is used in, ``None`` for dynamic records."""

    @property
    def index(self) -> int:
        """``int``: position of this record in its table."""
        return self.id & INDEX_MASK

    @property
    def hasDST(self) -> bool:
        """``bool``: whether this record describes a daylight saving zone."""
        return bool(self.dst_amount)

    def matches(self, name: str) -> bool:
        """Case-insensitive comparison of `name` against the code or full name."""
        folded = name.casefold()
        return folded in (self.code.casefold(), self.name.casefold())
