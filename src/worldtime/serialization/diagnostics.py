"""Validation entries collected while decoding structured records in diagnostics mode."""

from __future__ import annotations

# Standard Library Imports
from enum import Enum
from typing import Any

# Third Party Imports
from pydantic import BaseModel

# Local Imports
from ..common.logger import worldtimeLogError, worldtimeLogInfo, worldtimeLogWarning


class Severity(str, Enum):
    """Defines how serious a validation entry is."""

    INFO: str = "info"
    """``str``: the value was accepted but normalized."""

    WARNING: str = "warning"
    """``str``: the field was ignored and decoding continued without it."""

    ERROR: str = "error"
    """``str``: the record could not be decoded."""


class ValidationEntry(BaseModel):
    """One problem found in a structured record."""

    path: str
    """``str``: dotted path of the record holding the field, e.g. ``"location"``."""

    field: str
    """``str``: name of the offending field."""

    value: Any = None
    """value found in the field."""

    message: str
    """``str``: human readable description of the problem."""

    severity: Severity = Severity.ERROR
    """:class:`.Severity`: how serious the problem is."""


_LOG_BY_SEVERITY = {
    Severity.INFO: worldtimeLogInfo,
    Severity.WARNING: worldtimeLogWarning,
    Severity.ERROR: worldtimeLogError,
}


class ValidationCollector:
    """Caller-owned list of :class:`.ValidationEntry` items, logged as they are added."""

    def __init__(self, path: str = ""):
        """Create an empty collector.

        Args:
            path (``str``, optional): prefix prepended to the path of every entry.
        """
        self.path = path
        self.entries: list[ValidationEntry] = []

    def add(
        self,
        path: str,
        field: str,
        value: Any,
        message: str,
        severity: Severity = Severity.ERROR,
    ) -> ValidationEntry:
        """Record a problem and return the new entry."""
        full_path = ".".join(part for part in (self.path, path) if part)
        entry = ValidationEntry(
            path=full_path,
            field=field,
            value=value,
            message=message,
            severity=severity,
        )
        self.entries.append(entry)
        _LOG_BY_SEVERITY[severity](f"{full_path or '<root>'}.{field}: {message} ({value!r})")
        return entry

    @property
    def hasErrors(self) -> bool:
        """``bool``: whether any entry has :attr:`.Severity.ERROR`."""
        return any(entry.severity == Severity.ERROR for entry in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)
