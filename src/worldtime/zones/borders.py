"""Coarse region membership based on latitude/longitude bounding boxes.

Border polygons are not shipped; each region is a small set of boxes, which is enough to steer
timezone guesses near the dateline and to recognize the countries that carry special cases.
"""

from __future__ import annotations

# Standard Library Imports
from typing import TYPE_CHECKING

# Third Party Imports
from numpy import deg2rad

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from typing import Final


CANADA: Final[str] = "canada"
NEW_ZEALAND: Final[str] = "new_zealand"
TASMANIA: Final[str] = "tasmania"
AUSTRALIA_MAINLAND: Final[str] = "australia_mainland"

# (lon_min, lon_max, lat_min, lat_max) in degrees, bounds are exclusive
_BOXES: Final[dict[str, tuple[tuple[float, float, float, float], ...]]] = {
    NEW_ZEALAND: (
        (172.5, 178.6, -41.75, -34.3),  # north island
        (166.3, 174.5, -47.35, -40.4),  # south island
    ),
    TASMANIA: ((143.5, 149.0, -44.0, -39.5),),
    AUSTRALIA_MAINLAND: ((113.15, 153.633333, -39.133333, -10.683333),),
}

# Southern border of Canada as (eastern longitude limit, minimum latitude) steps, west to east
_CANADA_SOUTH: Final[tuple[tuple[float, float], ...]] = (
    (-122.8, 48.3),
    (-95.153, 49.0),
    (-88.0, 48.0),
    (-83.5, 45.5),
    (-78.7, 41.66),
    (-74.75, 43.65),
    (-67.31, 45.0),
)
_CANADA_SOUTH_EAST: Final[float] = 43.25


class BoundingBoxBorders:
    """Region membership tests approximated with bounding boxes.

    All coordinates are in radians, matching :class:`.Location`.
    """

    REGIONS: Final[tuple[str, ...]] = (CANADA, NEW_ZEALAND, TASMANIA, AUSTRALIA_MAINLAND)

    def pointInRegion(self, latitude: float, longitude: float, region: str) -> bool:
        """Return whether a point lies inside `region`.

        Args:
            latitude (``float``): latitude in radians
            longitude (``float``): longitude in radians
            region (``str``): one of :attr:`.REGIONS`

        Returns:
            ``bool``: ``True`` when the point is inside the region.

        Raises:
            ValueError: if `region` is not a known region.
        """
        if region == CANADA:
            return self._insideCanada(latitude, longitude)
        if (boxes := _BOXES.get(region)) is None:
            raise ValueError(f"Unknown border region: {region!r}")

        for lon_min, lon_max, lat_min, lat_max in boxes:
            if deg2rad(lon_min) < longitude < deg2rad(lon_max):
                if deg2rad(lat_min) < latitude < deg2rad(lat_max):
                    return True
        return False

    @staticmethod
    def _insideCanada(latitude: float, longitude: float) -> bool:
        if not deg2rad(41.0) <= latitude <= deg2rad(83.0):
            return False
        if not deg2rad(-141.0) <= longitude <= deg2rad(-52.0):
            return False

        for east_limit, min_latitude in _CANADA_SOUTH:
            if longitude < deg2rad(east_limit):
                return bool(latitude >= deg2rad(min_latitude))
        return bool(latitude >= deg2rad(_CANADA_SOUTH_EAST))
