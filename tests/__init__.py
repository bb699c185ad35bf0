"""Configure importable things that aren't pytest fixtures."""

from __future__ import annotations

# Standard Library Imports
from pathlib import Path

# Common file paths
FIXTURE_DATA_DIR = Path(__file__).parent / "datafiles"
WIRE_RECORDS_PATH = Path("wire/time_records.json")
CUSTOM_CONFIG_PATH = Path("config/custom_behavior.config")
