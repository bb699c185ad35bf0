"""Global math & astronomy constants.

References:
    #. NOAA Global Monitoring Laboratory, "Solar Calculation Details"
    #. :cite:t:`meeus_1998_astro`, Chapters 7, 22 and 25
"""

from __future__ import annotations

# Third Party Imports
from numpy import pi

# Conversion constants
PI = pi
TWOPI = 2.0 * pi
DEG2RAD = pi / 180.0
RAD2DEG = 180.0 / pi
MIN_PER_DAY = 1440.0
SEC_PER_DAY = 86400

# Julian date bookkeeping
J2000_JD = 2451545.0
DAYS_PER_JULIAN_CENTURY = 36525.0

ZENITH_SUNRISE_DEG: float = 90.833
"""``float``: zenith angle of the solar disk's upper limb at rise/set, including refraction."""

POLAR_CIRCLE_DEG: float = 66.4
"""``float``: latitude beyond which the polar day/night search is used."""

MAX_SOLAR_LATITUDE_DEG: float = 89.8
"""``float``: latitudes closer to a pole are clamped to this value."""
