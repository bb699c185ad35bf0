"""Defines the database models used to persist runtime zone records."""

from __future__ import annotations

# Local Imports
from .table_base import Base
from .zone_entry import ZoneEntry

__all__ = [
    "Base",
    "ZoneEntry",
]
