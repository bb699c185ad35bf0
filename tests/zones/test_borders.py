from __future__ import annotations

# Third Party Imports
import pytest
from numpy import deg2rad

# WORLDTIME Imports
from worldtime.zones.borders import (
    AUSTRALIA_MAINLAND,
    CANADA,
    NEW_ZEALAND,
    TASMANIA,
    BoundingBoxBorders,
)


@pytest.fixture(name="borders")
def getBorders() -> BoundingBoxBorders:
    """Return the default border tests."""
    return BoundingBoxBorders()


def inside(borders: BoundingBoxBorders, latitude: float, longitude: float, region: str) -> bool:
    return borders.pointInRegion(deg2rad(latitude), deg2rad(longitude), region)


@pytest.mark.parametrize(
    ("latitude", "longitude", "expected"),
    [
        (51.05, -114.07, True),  # Calgary
        (49.28, -123.12, True),  # Vancouver
        (43.65, -79.38, True),  # Toronto
        (44.65, -63.57, True),  # Halifax
        (82.5, -62.3, True),  # Alert
        (47.6, -122.3, False),  # Seattle
        (44.98, -93.27, False),  # Minneapolis
        (43.66, -70.26, False),  # Portland, Maine
        (61.2, -149.9, False),  # Anchorage
        (64.18, -51.7, False),  # Nuuk
        (51.5, -0.13, False),  # London
    ],
)
def testCanada(borders: BoundingBoxBorders, latitude: float, longitude: float, expected: bool):
    """Test the stepped southern border of Canada."""
    assert inside(borders, latitude, longitude, CANADA) is expected


@pytest.mark.parametrize(
    ("latitude", "longitude", "region"),
    [
        (-36.85, 174.76, NEW_ZEALAND),  # Auckland
        (-43.53, 172.64, NEW_ZEALAND),  # Christchurch
        (-42.88, 147.33, TASMANIA),  # Hobart
        (-33.87, 151.21, AUSTRALIA_MAINLAND),  # Sydney
        (-31.95, 115.86, AUSTRALIA_MAINLAND),  # Perth
        (-12.46, 130.84, AUSTRALIA_MAINLAND),  # Darwin
    ],
)
def testBoxes(borders: BoundingBoxBorders, latitude: float, longitude: float, region: str):
    """Test that each city lies in its own region only."""
    for other in BoundingBoxBorders.REGIONS:
        assert inside(borders, latitude, longitude, other) is (other == region)


def testBoxBoundsAreExclusive(borders: BoundingBoxBorders):
    """Test that a point on the edge of a box is outside it."""
    assert not inside(borders, -44.0, 147.0, TASMANIA)
    assert not inside(borders, -42.0, 149.0, TASMANIA)
    assert inside(borders, -43.99, 148.99, TASMANIA)


def testUnknownRegion(borders: BoundingBoxBorders):
    """Test that an unknown region name is rejected."""
    with pytest.raises(ValueError, match="atlantis"):
        inside(borders, 0.0, 0.0, "atlantis")
