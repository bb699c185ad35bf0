"""Define the command line interface for the WORLDTIME tool."""

from __future__ import annotations

# Standard Library Imports
import argparse

# Local Imports
from ..times.duration import Duration
from .logger import worldtimeLogError


def offsetChecker(text):
    """Checks for valid UTC offsets passed to the CLI parser.

    Args:
        text (``str``): offset given to CLI parser, e.g. ``"+05:30"`` or ``"-07:00"``.
            A negative offset must be attached to its option, ``--offset=-07:00``, since
            argparse reads a separate ``-07:00`` as an option string.

    Raises:
        ValueError: if the offset can't be parsed

    Returns:
        :class:`.Duration`: the signed offset
    """
    sign = -1 if text.startswith("-") else 1
    parsed = Duration.parseTime(text.lstrip("+-"))
    if not parsed.count:
        worldtimeLogError(f"Bad UTC offset given to CLI: {text!r}")
        raise ValueError(text)
    return parsed.duration * sign


def latitudeChecker(text):
    """Checks for a latitude in degrees, ``[-90, 90]``."""
    value = float(text)
    if not -90.0 <= value <= 90.0:
        worldtimeLogError(f"Bad latitude given to CLI: {text!r}")
        raise ValueError(text)
    return value


def longitudeChecker(text):
    """Checks for a longitude in degrees, ``[-180, 180]``."""
    value = float(text)
    if not -180.0 <= value <= 180.0:
        worldtimeLogError(f"Bad longitude given to CLI: {text!r}")
        raise ValueError(text)
    return value


def getCommandLineParser():
    """Create parser for command line arguments.

    Returns:
        ``argparse.ArgumentParser``: valid parser object
    """
    parser = argparse.ArgumentParser(description="WORLDTIME Command Line Interface")
    commands = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    format_parser = commands.add_parser(
        "format",
        help="Parse an ISO-8601 time and print it as local time at a location",
    )
    format_parser.add_argument(
        "time",
        metavar="TIME",
        type=str,
        help="ISO-8601 time, e.g. 2018-01-20T12:31:00Z",
    )
    format_parser.add_argument(
        "-o",
        "--offset",
        dest="offset",
        metavar="HH:MM",
        default=None,
        type=offsetChecker,
        help="UTC offset of the location, write negative offsets as --offset=-07:00. DEFAULT: UTC",
    )
    format_parser.add_argument(
        "--dst",
        dest="dst",
        action="store_true",
        default=False,
        help="Observe one hour of daylight saving time all year",
    )

    duration_parser = commands.add_parser(
        "duration",
        help="Parse a duration and print its ISO-8601 and legacy forms",
    )
    duration_parser.add_argument(
        "text",
        metavar="TEXT",
        type=str,
        help="ISO-8601 duration, e.g. P3DT1H5M10.5S, or legacy '3 days 01:05:10'",
    )

    sun_parser = commands.add_parser(
        "sun",
        help="Print sunrise, solar noon and sunset for a day at a coordinate",
    )
    sun_parser.add_argument(
        "date",
        metavar="DATE",
        type=str,
        help="Date as YYYY-MM-DD",
    )
    sun_parser.add_argument(
        "--lat",
        dest="latitude",
        metavar="DEG",
        required=True,
        type=latitudeChecker,
        help="Latitude in degrees, north positive",
    )
    sun_parser.add_argument(
        "--lon",
        dest="longitude",
        metavar="DEG",
        required=True,
        type=longitudeChecker,
        help="Longitude in degrees, east positive",
    )
    sun_parser.add_argument(
        "-o",
        "--offset",
        dest="offset",
        metavar="HH:MM",
        default=None,
        type=offsetChecker,
        help=(
            "UTC offset of the location, write negative offsets as --offset=-07:00. "
            "DEFAULT: guessed from the longitude"
        ),
    )

    return parser
