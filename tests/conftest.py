from __future__ import annotations

# Standard Library Imports
import logging
import sys
from typing import TYPE_CHECKING

# Third Party Imports
import pytest

# WORLDTIME Imports
from worldtime.common.behavioral_config import BehavioralConfig
from worldtime.times.context import TimeContext
from worldtime.times.duration import Duration
from worldtime.times.location import Location
from worldtime.zones.catalog import ZoneCatalog
from worldtime.zones.database import ZoneDatabase

# Type Checking Imports
if TYPE_CHECKING:
    # WORLDTIME Imports
    from worldtime.common.logger import Logger


@pytest.fixture(autouse=True)
def _patchMissingEnvVariables(monkeypatch: pytest.MonkeyPatch) -> None:
    """Automatically delete each environment variable, if set.

    Args:
        monkeypatch (:class:`pytest.MonkeyPatch`): monkeypatch obj to track changes

    Note:
        This is used so tests can assume a "blank" configuration, and it won't
        overwrite a user's custom-set environment variables.
    """
    with monkeypatch.context() as m_patch:
        m_patch.delenv("WORLDTIME_BEHAVIOR_CONFIG", raising=False)
        yield
        # Make sure we reset the config after each test function
        BehavioralConfig.getConfig()


@pytest.fixture(scope="session", name="test_logger")
def getTestLoggerObject() -> Logger:
    """Create a custom :class:`logging.Logger` object."""
    logger = logging.getLogger("Unit Test Logger")
    logger.setLevel(logging.DEBUG)
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    logger.addHandler(handler)
    return logger


@pytest.fixture(name="utc_context")
def getUTCContext() -> TimeContext:
    """Return a context bound to a location at UTC that never observes DST."""
    return TimeContext(Location(timezone=Duration(), dst_amount=Duration()))


@pytest.fixture(name="zone_database")
def getZoneDatabase() -> ZoneDatabase:
    """Return an in-memory :class:`.ZoneDatabase` that resolves any coordinate to Edmonton."""
    return ZoneDatabase("sqlite://", resolver=lambda lat, lon: "America/Edmonton")


@pytest.fixture(name="database_catalog")
def getDatabaseCatalog(zone_database: ZoneDatabase) -> ZoneCatalog:
    """Return a :class:`.ZoneCatalog` backed by :func:`.getZoneDatabase`."""
    return ZoneCatalog(database=zone_database)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add command line options."""
    parser.addoption("--runslow", action="store_true", default=False, help="run slow tests")


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest options without an .ini file."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(
    session: pytest.Session,
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Collect pytest modifiers."""
    if config.getoption("--runslow"):
        # --runslow given in cli: do not skip slow tests
        return
    skip_slow = pytest.mark.skip(reason="need --runslow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)
