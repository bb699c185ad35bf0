"""Main Module Documentation.

The top-level module is documented below, which mainly serves as a command line entry point for
formatting times at a location, decoding durations and computing sunrise and sunset.
"""

from __future__ import annotations

# Standard Library Imports
from typing import TYPE_CHECKING

# Type Checking Imports
if TYPE_CHECKING:
    # Local Imports
    from .times.duration import Duration

__version__ = "1.0.0"

CONFIG_ENV_VARIABLE: str = "WORLDTIME_BEHAVIOR_CONFIG"
"""``str``: environment variable naming a custom behavioral config file."""


def formatTime(text: str, offset: Duration | None = None, dst: bool = False) -> str:
    """Parse an ISO-8601 time and return it as local ISO-8601 time at a location.

    Args:
        text (``str``): ISO-8601 time; an embedded ``Z`` or ``±HH:MM`` offset is honored.
        offset (:class:`.Duration`, optional): UTC offset of the location. Defaults to UTC.
        dst (``bool``, optional): whether the location observes one hour of DST all year.

    Raises:
        ValueError: if `text` is not a valid time

    Returns:
        ``str``: the time formatted with :data:`.ISO8601`
    """
    # Local Imports
    from .common.logger import worldtimeLogError
    from .times.constants import ISO8601
    from .times.context import TimeContext
    from .times.duration import Duration
    from .times.instant import Instant
    from .times.location import Location

    location = Location(
        timezone=offset,
        dst_start=Duration(),
        dst_end=Duration(days=366) if dst else Duration(),
        dst_amount=Duration(hours=1),
    )
    context = TimeContext(location)
    if (instant := Instant.unset(context).parseDateTime(text, ISO8601)) is None:
        worldtimeLogError(f"Unable to parse time: {text!r}")
        raise ValueError(text)
    return instant.toString(ISO8601)


def describeDuration(text: str) -> list[str]:
    """Parse a duration and return its ISO-8601 and legacy forms.

    Raises:
        ValueError: if `text` is not a valid duration
    """
    # Local Imports
    from .common.logger import worldtimeLogError
    from .times.constants import DAY, INCLUDE_USECS
    from .times.duration import Duration

    parsed = Duration.parseTime(text)
    if not parsed.count:
        worldtimeLogError(f"Unable to parse duration: {text!r}")
        raise ValueError(text)
    return [parsed.duration.toISO8601(), parsed.duration.toString(DAY | INCLUDE_USECS)]


def describeSun(
    date: str,
    latitude: float,
    longitude: float,
    offset: Duration | None = None,
) -> list[str]:
    """Return sunrise, solar noon and sunset of a day at a coordinate.

    Args:
        date (``str``): date as ``YYYY-MM-DD``.
        latitude (``float``): latitude in degrees.
        longitude (``float``): longitude in degrees, east positive.
        offset (:class:`.Duration`, optional): UTC offset of the location. Defaults to the zone
            guessed from the coordinate.

    Raises:
        ValueError: if `date` is not a valid date

    Returns:
        ``list``: one ``"label: time"`` line per event, ``none`` for an event that doesn't occur
    """
    # Local Imports
    from .common.logger import worldtimeLogError
    from .physics.solar import NO_SUNRISE, NO_SUNSET
    from .times.constants import AS_LOCAL, ISO8601, WITHDST, YYYYhMMhDD
    from .times.context import TimeContext
    from .times.duration import Duration
    from .times.instant import Instant
    from .times.location import Location

    location = Location.fromDegrees(latitude, longitude, guess_zone=offset is None)
    if offset is not None:
        location.timezone = offset
    context = TimeContext(location)

    flags = YYYYhMMhDD | AS_LOCAL | WITHDST
    if (midnight := Instant.unset(context).parseDateTime(date, flags)) is None:
        worldtimeLogError(f"Unable to parse date: {date!r}")
        raise ValueError(date)

    events = location.sunRiseSet(midnight + Duration(hours=12))
    return [
        f"sunrise: {'none' if events.flags & NO_SUNRISE else events.rise.toString(ISO8601)}",
        f"noon:    {events.noon.toString(ISO8601)}",
        f"sunset:  {'none' if events.flags & NO_SUNSET else events.set.toString(ISO8601)}",
    ]


def main() -> None:
    """WORLDTIME main entry point.

    This is the function that the :command:`worldtime` command points to. See :mod:`.cli` for
    details on what command line options are available.
    """
    # Standard Library Imports
    import os

    # Local Imports
    from .common.behavioral_config import BehavioralConfig
    from .common.cli import getCommandLineParser
    from .common.logger import Logger

    # Parse command line arguments and dispatch to the sub-command
    parser = getCommandLineParser()
    cli_args = parser.parse_args()

    BehavioralConfig.getConfig(os.environ.get(CONFIG_ENV_VARIABLE))
    Logger("worldtime")

    try:
        if cli_args.command == "format":
            lines = [formatTime(cli_args.time, offset=cli_args.offset, dst=cli_args.dst)]
        elif cli_args.command == "duration":
            lines = describeDuration(cli_args.text)
        else:
            lines = describeSun(
                cli_args.date,
                cli_args.latitude,
                cli_args.longitude,
                offset=cli_args.offset,
            )
    except ValueError as error:
        parser.error(f"invalid {cli_args.command} input: {error}")

    for line in lines:
        print(line)  # noqa: T201
