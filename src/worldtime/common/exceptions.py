"""Contains all the custom-defined exceptions used in WORLDTIME."""

from __future__ import annotations


class AdjustmentFlagError(Exception):
    """Exception indicating solar time was combined with local time or daylight savings."""


class ArchiveVersionError(Exception):
    """Exception indicating an archive record carries an unknown version tag."""


class ArchiveFormatError(Exception):
    """Exception indicating an archive stream ended before a record was complete."""


class WireDecodeError(Exception):
    """Exception indicating a structured time record could not be decoded."""

    def __init__(self, field: str, message: str) -> None:
        """Record which field of the structured record failed.

        Args:
            field (``str``): name of the offending field
            message (``str``): description of the failure
        """
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class ZoneDatabaseError(Exception):
    """Exception indicating the zone database could not be initialized."""
