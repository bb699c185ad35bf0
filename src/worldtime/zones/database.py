"""Defines the :class:`.ZoneDatabase` fallback for zones outside the static tables.

Names are resolved against the IANA timezone database through :mod:`zoneinfo` (backed by the
``tzdata`` distribution). Each resolved zone becomes a *dynamic* :class:`.ZoneRecord` with an id
in the :data:`.DYNAMIC_ID` range; records are append-only for the lifetime of the database object
and are mirrored into a SQLAlchemy table so the ids stay stable across runs that share a database
file.
"""

from __future__ import annotations

# Standard Library Imports
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from threading import RLock
from traceback import format_exc
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# Third Party Imports
from numpy import rad2deg
from sqlalchemy import create_engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Local Imports
from ..common.behavioral_config import BehavioralConfig
from ..common.exceptions import ZoneDatabaseError
from ..common.logger import Logger
from ..data.table_base import Base
from ..data.zone_entry import ZoneEntry
from ..times.duration import Duration
from .records import DST_SET_DAYLIGHT, DST_SET_MILITARY, DYNAMIC_ID, ZoneRecord

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Callable

    CoordinateResolver = Callable[[float, float], "str | None"]


class ZoneDatabase:
    """Thread-safe, lazily initialized store of zones resolved from the IANA database.

    Nothing is touched until the first lookup: the SQLAlchemy engine is created, the mirror table
    is made to exist, and any records saved by an earlier run are loaded. Initialization and
    appends happen under one re-entrant lock.
    """

    SQLITE_PREFIX = "sqlite://"

    def __init__(
        self,
        db_path: str | None = None,
        resolver: CoordinateResolver | None = None,
        probe_year: int | None = None,
        logger: Logger | None = None,
    ):
        """Create a database; the backing store is opened on first use.

        Args:
            db_path (``str``, optional): SQLAlchemy URL of the mirror table. Defaults to the
                configured ``database.DatabasePath``.
            resolver (``callable``, optional): maps ``(latitude, longitude)`` in degrees onto an
                IANA name, or ``None`` when the point is not covered. Without a resolver
                :meth:`.byCoordinate` never finds a zone.
            probe_year (``int``, optional): year whose January 2 and July 2 are used to read the
                standard and daylight offsets of a zone. Defaults to ``times.ZoneProbeYear``.
            logger (:class:`.Logger`, optional): previously instantiated logging object to use.
        """
        config = BehavioralConfig.getConfig()
        if not db_path:
            db_path = config.database.DatabasePath
        if probe_year is None:
            probe_year = config.times.ZoneProbeYear

        self.db_path = db_path
        self.resolver = resolver
        self.probe_year = probe_year
        self.logger = logger
        if self.logger is None:
            self.logger = Logger("worldtime", path=config.logging.OutputLocation)

        self._lock = RLock()
        self._engine = None
        self._session_factory = None
        self._records: list[ZoneRecord] = []
        self._by_id: dict[int, ZoneRecord] = {}

    @property
    def records(self) -> tuple[ZoneRecord, ...]:
        """``tuple``: every dynamic record created so far, in id order."""
        self._initialize()
        with self._lock:
            return tuple(self._records)

    def _initialize(self) -> None:
        with self._lock:
            if self._engine is not None:
                return

            try:
                if self.db_path.startswith(self.SQLITE_PREFIX):
                    engine = create_engine(
                        self.db_path,
                        connect_args={"check_same_thread": False},
                        poolclass=StaticPool,
                    )
                else:
                    engine = create_engine(self.db_path)
                Base.metadata.create_all(engine, checkfirst=True)
                session_factory = sessionmaker(bind=engine)
                with session_factory() as session:
                    rows = session.scalars(select(ZoneEntry).order_by(ZoneEntry.id)).all()
                    loaded = [row.toZoneRecord() for row in rows]
            except SQLAlchemyError as err:
                self.logger.error(f"Unable to open zone database: \n{format_exc()}")
                raise ZoneDatabaseError(f"Unable to open zone database {self.db_path!r}") from err

            self._engine = engine
            self._session_factory = session_factory
            for record in loaded:
                self._records.append(record)
                self._by_id[record.id] = record
            self.logger.debug(
                f"Zone database {self.db_path!r} ready with {len(self._records)} dynamic zones",
            )

    @contextmanager
    def _getSessionScope(self):
        """Provide a transactional scope around a series of operations.

        Yields:
            :class:`sqlalchemy.orm.session.Session`: establishes all conversations with DB
        """
        current_session = self._session_factory()
        try:
            yield current_session
            current_session.commit()
        except SQLAlchemyError:
            self.logger.error(
                f"Exception thrown in `::getSessionScope()` by {self}: \n{format_exc()}",
            )
            current_session.rollback()
            raise
        finally:
            current_session.close()

    def _addRecord(self, offset: Duration, save: Duration, code: str, name: str) -> ZoneRecord:
        """Return the record for a probed zone, appending it when it has not been seen."""
        with self._lock:
            for record in self._records:
                if (
                    record.offset == offset
                    and record.dst_amount == save
                    and record.code == code
                    and record.name == name
                ):
                    return record

            record = ZoneRecord(
                offset=offset,
                dst_amount=save,
                code=code,
                name=name,
                id=DYNAMIC_ID + len(self._records),
            )
            with self._getSessionScope() as session:
                session.add(ZoneEntry.fromZoneRecord(record))
            self._records.append(record)
            self._by_id[record.id] = record
            self.logger.info(f"Added dynamic zone {record.code!r} ({name}) as {record.id:#x}")
            return record

    def _probe(self, zone: ZoneInfo, month: int) -> tuple[Duration, Duration, str]:
        """Read ``(standard offset, dst amount, abbreviation)`` of `zone` on the 2nd of `month`."""
        moment = datetime(self.probe_year, month, 2, tzinfo=timezone.utc).astimezone(zone)
        total = moment.utcoffset() or timedelta(0)
        save = moment.dst() or timedelta(0)
        return (
            Duration(seconds=int((total - save).total_seconds())),
            Duration(seconds=int(save.total_seconds())),
            moment.tzname() or "",
        )

    def byName(self, name: str, dst_set: int) -> ZoneRecord | None:
        """Find or create the dynamic record of an IANA zone.

        Args:
            name (``str``): IANA key, e.g. ``"America/Edmonton"``
            dst_set (``int``): ``DST_SET_DAYLIGHT`` for the summer variant; military is treated
                as standard

        Returns:
            :class:`.ZoneRecord`: the zone, or ``None`` when `name` is not an IANA key.
        """
        self._initialize()
        if dst_set == DST_SET_MILITARY:
            dst_set = 0
        daylight = dst_set == DST_SET_DAYLIGHT

        with self._lock:
            for record in self._records:
                if record.name.casefold() == name.casefold() and record.hasDST == daylight:
                    return record

        try:
            zone = ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            self.logger.debug(f"{name!r} is not an IANA zone")
            return None

        standard = self._probe(zone, 1)
        summer = self._probe(zone, 7)
        # Southern hemisphere zones observe DST in January
        if standard[1]:
            standard, summer = summer, standard

        offset, save, code = summer if daylight else standard
        return self._addRecord(offset, save, code, zone.key)

    def byId(self, zone_id: int) -> ZoneRecord | None:
        """Return a dynamic record by id, or ``None`` if it was never created."""
        self._initialize()
        with self._lock:
            return self._by_id.get(zone_id)

    def byCoordinate(self, latitude: float, longitude: float, dst_set: int) -> ZoneRecord | None:
        """Resolve a coordinate in radians through the configured resolver."""
        if self.resolver is None:
            return None
        if (name := self.resolver(float(rad2deg(latitude)), float(rad2deg(longitude)))) is None:
            return None
        return self.byName(name, dst_set)

    def __repr__(self) -> str:
        return f"ZoneDatabase({self.db_path!r})"
