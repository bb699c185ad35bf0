"""Static zone tables and the algorithms that resolve a zone from a place, a name or an id.

The primary tables hold the commonly used zones. The "extra" tables disambiguate zones that share
an offset with a primary entry; matches found there are reported as *hidden* so callers can prefer
the primary entry when presenting a zone. Anything not covered by the static tables is delegated to
an optional :class:`.ZoneDatabase`.
"""

from __future__ import annotations

# Standard Library Imports
from typing import TYPE_CHECKING, NamedTuple

# Local Imports
from ..physics.constants import PI, TWOPI
from ..times.duration import Duration
from .borders import NEW_ZEALAND, TASMANIA, BoundingBoxBorders
from .records import (
    DAYLIGHT_ID,
    DST_SET_DAYLIGHT,
    DST_SET_MILITARY,
    DST_SET_STANDARD,
    MILITARY_ID,
    STANDARD_ID,
    ZoneRecord,
    isDynamic,
    makeId,
)

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Iterable
    from typing import Final

    # Local Imports
    from .database import ZoneDatabase


def _buildTable(table: int, rows: Iterable[tuple], dst_amount: Duration) -> tuple[ZoneRecord, ...]:
    return tuple(
        ZoneRecord(
            offset=Duration(hours=hours, minutes=minutes),
            dst_amount=dst_amount,
            code=code,
            name=name,
            id=makeId(table, index),
            region=region,
        )
        for index, hours, minutes, code, name, region in rows
    )


STANDARD_ZONES: Final[tuple[ZoneRecord, ...]] = _buildTable(
    STANDARD_ID,
    (
        (0, 9, 30, "ACST", "Australian Central Standard Time", "australia"),
        (1, 10, 0, "AEST", "Australian Eastern Standard Time", "australia"),
        (2, -9, 0, "AKST", "Alaska Standard Time", "north america"),
        (3, -4, 0, "AST", "Atlantic Standard Time", "north america"),
        (4, 8, 0, "AWST", "Australian Western Standard Time", "australia"),
        (5, 1, 0, "CET", "Central European Time", "europe"),
        (6, -6, 0, "CST", "Central Standard Time", "north america"),
        (7, 7, 0, "CXT", "Christmas Island Time", "australia"),
        (8, 2, 0, "EET", "Eastern European Time", "europe"),
        (9, -5, 0, "EST", "Eastern Standard Time", "north america"),
        (10, -10, 0, "HAST", "Hawaii-Aleutian Standard Time", "north america"),
        (11, 3, 0, "MSK", "Moscow Standard Time", "europe"),
        (12, -7, 0, "MST", "Mountain Standard Time", "north america"),
        (13, 11, 30, "NFT", "Norfolk (Island) Time", "australia"),
        (14, -3, -30, "NST", "Newfoundland Standard Time", "north america"),
        (15, 12, 0, "NZST", "New Zealand Standard Time", "pacific"),
        (16, -8, 0, "PST", "Pacific Standard Time", "north america"),
        (17, 0, 0, "UTC", "Coordinated Universal Time", "worldwide"),
        (18, 2, 0, "RZ1", "Russian Zone 1", "europe"),
        (19, 3, 0, "RZ2", "Russian Zone 2", "europe"),
        (20, 4, 0, "RZ3", "Russian Zone 3", "europe"),
        (21, 1, 0, "WAT", "West Africa Time", "africa"),
        (22, -1, 0, "AZOT", "Azores Time", "atlantic"),
        (23, -11, 0, "NT", "Nome Time", "north america"),
        (24, 5, 30, "IST", "India Standard Time", "asia"),
        (25, 8, 0, "CCT", "China Coast Time", "asia"),
        (26, 9, 0, "JST", "Japan Standard Time", "asia"),
        (27, 10, 0, "GST", "Guam Standard Time", "pacific"),
    ),
    Duration(),
)
"""``tuple``: primary standard time zones, ids ``STANDARD_ID | 0..27``."""

DAYLIGHT_ZONES: Final[tuple[ZoneRecord, ...]] = _buildTable(
    DAYLIGHT_ID,
    (
        (0, 9, 30, "ACDT", "Australian Central Daylight Time", "australia"),
        (1, -4, 0, "ADT", "Atlantic Daylight Time", "north america"),
        (2, 10, 0, "AEDT", "Australian Eastern Daylight Time", "australia"),
        (3, -9, 0, "AKDT", "Alaska Daylight Time", "north america"),
        (4, 8, 0, "AWDT", "Australian Western Daylight Time", "australia"),
        (5, 0, 0, "BST", "British Summer Time", "europe"),
        (6, -6, 0, "CDT", "Central Daylight Time", "north america"),
        (7, 1, 0, "CEST", "Central European Summer Time", "europe"),
        (8, -5, 0, "EDT", "Eastern Daylight Time", "north america"),
        (9, 2, 0, "EEST", "Eastern European Summer Time", "europe"),
        (10, -10, 0, "HADT", "Hawaii-Aleutian Daylight Time", "north america"),
        (11, 0, 0, "IST", "Irish Summer Time", "europe"),
        (12, -7, 0, "MDT", "Mountain Daylight Time", "north america"),
        (13, 3, 0, "MSD", "Moscow Daylight Time", "europe"),
        (14, -3, -30, "NDT", "Newfoundland Daylight Time", "north america"),
        (15, 12, 0, "NZDT", "New Zealand Daylight Time", "pacific"),
        (16, -8, 0, "PDT", "Pacific Daylight Time", "north america"),
        (17, 0, 0, "WEST", "Western European Summer Time", "europe"),
    ),
    Duration(hours=1),
)
"""``tuple``: primary daylight time zones, ids ``DAYLIGHT_ID | 0..17``."""

MILITARY_ZONES: Final[tuple[ZoneRecord, ...]] = _buildTable(
    MILITARY_ID,
    (
        (0, 0, 0, "Z", "Zulu Time Zone", None),
        (1, 1, 0, "A", "Alpha Time Zone", None),
        (2, 2, 0, "B", "Bravo Time Zone", None),
        (3, 3, 0, "C", "Charlie Time Zone", None),
        (4, 4, 0, "D", "Delta Time Zone", None),
        (5, 5, 0, "E", "Echo Time Zone", None),
        (6, 6, 0, "F", "Foxtrot Time Zone", None),
        (7, 7, 0, "G", "Golf Time Zone", None),
        (8, 8, 0, "H", "Hotel Time Zone", None),
        (9, 9, 0, "I", "India Time Zone", None),
        (10, 10, 0, "K", "Kilo Time Zone", None),
        (11, 11, 0, "L", "Lima Time Zone", None),
        (12, 12, 0, "M", "Mike Time Zone", None),
        (13, -1, 0, "N", "November Time Zone", None),
        (14, -2, 0, "O", "Oscar Time Zone", None),
        (15, -3, 0, "P", "Papa Time Zone", None),
        (16, -4, 0, "Q", "Quebec Time Zone", None),
        (17, -5, 0, "R", "Romeo Time Zone", None),
        (18, -6, 0, "S", "Sierra Time Zone", None),
        (19, -7, 0, "T", "Tango Time Zone", None),
        (20, -8, 0, "U", "Uniform Time Zone", None),
        (21, -9, 0, "V", "Victor Time Zone", None),
        (22, -10, 0, "W", "Whiskey Time Zone", None),
        (23, -11, 0, "X", "X-ray Time Zone", None),
        (24, -12, 0, "Y", "Yankee Time Zone", None),
    ),
    Duration(),
)
"""``tuple``: NATO military time zones, ids ``MILITARY_ID | 0..24``."""

EXTRA_DAYLIGHT_ZONES: Final[tuple[ZoneRecord, ...]] = _buildTable(
    DAYLIGHT_ID,
    (
        (18, 3, 0, "ADT", "Arabia Daylight Time", "asia"),
        (19, -4, 0, "AMST", "Amazon Summer Time", "south america"),
        (20, -1, 0, "AZOST", "Azores Summer Time", "atlantic"),
        (21, 4, 0, "AZST", "Azerbaijan Summer Time", "asia"),
        (22, -3, 0, "BRST", "Brasília Summer Time", "south america"),
        (23, -4, 0, "CDT", "Cuba Daylight Time", "caribbean"),
        (24, 12, 45, "CHADT", "Chatham Island Daylight Time", "pacific"),
        (25, -4, 0, "CLST", "Chile Summer Time", "south america"),
        (26, -6, 0, "EASST", "Easter Island Summer Time", "pacific"),
        (27, -1, 0, "EGST", "Eastern Greenland Summer Time", "north america"),
        (28, -4, 0, "FKST", "Falkland Islands Summer Time", "south america"),
        (29, 2, 0, "IDT", "Israel Daylight Time", "asia"),
        (30, 3, 30, "IRDT", "Iran Daylight Time", "asia"),
        (31, 8, 0, "IRKST", "Irkutsk Summer Time", "asia"),
        (32, 7, 0, "KRAST", "Krasnoyarsk Summer Time", "asia"),
        (33, 10, 0, "LHDT", "Lord Howe Daylight Time", "australia"),
        (34, 11, 0, "MAGST", "Magadan Summer Time", "asia"),
        (35, 6, 0, "NOVST", "Novosibirsk Summer Time", "asia"),
        (36, 8, 0, "OMSST", "Omsk Summer Time", "asia"),
        (37, 13, 0, "PETST", "Kamchatka Summer Time", "asia"),
        (38, -3, 0, "PMDT", "Pierre & Miquelon Daylight Time", "north america"),
        (39, -3, 0, "UYST", "Uruguay Summer Time", "south america"),
        (40, 10, 0, "VLAST", "Vladivostok Summer Time", "asia"),
        (41, -4, 0, "WARST", "Western Argentine Summer Time", "south america"),
        (42, 1, 0, "WAST", "West Africa Summer Time", "africa"),
        (43, -3, 0, "WGST", "Western Greenland Summer Time", "north america"),
        (44, 0, 0, "WST", "Western Sahara Summer Time", "africa"),
        (45, 9, 0, "YAKST", "Yakutsk Summer Time", "asia"),
        (46, 5, 0, "YEKST", "Yekaterinburg Summer Time", "asia"),
        (47, 12, 0, "FJST", "Fiji Summer Time", "pacific"),
        (48, -4, 0, "PYST", "Paraguay Summer Time", "south america"),
        (49, 4, 0, "AMST", "Armenia Summer Time", "asia"),
    ),
    Duration(hours=1),
)
"""``tuple``: hidden daylight time zones, ids ``DAYLIGHT_ID | 18..49``."""

EXTRA_STANDARD_ZONES: Final[tuple[ZoneRecord, ...]] = _buildTable(
    STANDARD_ID,
    (
        (28, -5, 0, "ACT", "Acre Time", "south america"),
        (29, 8, 45, "ACWST", "Australian Central Western Standard Time", "australia"),
        (30, 4, 30, "AFT", "Afghanistan Time", "asia"),
        (31, 6, 0, "ALMT", "Alma-Ata Time", "asia"),
        (32, -4, 0, "AMT", "Amazon Time", "south america"),
        (33, 4, 0, "AMT", "Armenia Time", "asia"),
        (34, 12, 0, "ANAT", "Anadyr Time", "asia"),
        (35, 5, 0, "AQTT", "Aqtobe Time", "asia"),
        (36, -3, 0, "ART", "Argentina Time", "south america"),
        (37, 3, 0, "AST", "Arabia Standard Time", "asia"),
        (38, 4, 0, "AZT", "Azerbaijan Time", "asia"),
        (39, -12, 0, "AoE", "Anywhere on Earth", "pacific"),
        (40, 8, 0, "BNT", "Brunei Darussalam Time", "asia"),
        (41, -4, 0, "BOT", "Bolivia Time", "south america"),
        (42, -3, 0, "BRT", "Brasília Time", "south america"),
        (43, 6, 0, "BST", "Bangladesh Standard Time", "asia"),
        (44, 6, 0, "BTT", "Bhutan Time", "asia"),
        (45, 8, 0, "CAST", "Casey Time", "antarctica"),
        (46, 2, 0, "CAT", "Central Africa Time", "africa"),
        (47, 6, 30, "CCT", "Cocos Islands Time", "indian ocean"),
        (48, 12, 45, "CHAST", "Chatham Island Standard Time", "pacific"),
        (49, 8, 0, "CHOT", "Choibalsan Time", "asia"),
        (50, 10, 0, "CHUT", "Chuuk Time", "pacific"),
        (51, -10, 0, "CKT", "Cook Island Time", "pacific"),
        (52, -4, 0, "CLT", "Chile Standard Time", "south america"),
        (53, -5, 0, "COT", "Colombia Time", "south america"),
        (54, 8, 0, "CST", "China Standard Time", "asia"),
        (55, -5, 0, "CST", "Cuba Standard Time", "caribbean"),
        (56, -1, 0, "CVT", "Cape Verde Time", "africa"),
        (57, 10, 0, "ChST", "Chamorro Standard Time", "pacific"),
        (58, 7, 0, "DAVT", "Davis Time", "antarctica"),
        (59, -6, 0, "EAST", "Easter Island Standard Time", "pacific"),
        (60, 3, 0, "EAT", "Eastern Africa Time", "africa"),
        (61, -5, 0, "ECT", "Ecuador Time", "south america"),
        (62, -1, 0, "EGT", "East Greenland Time", "north america"),
        (63, 3, 0, "FET", "Further-Eastern European Time", "europe"),
        (64, 12, 0, "FJT", "Fiji Time", "pacific"),
        (65, -4, 0, "FKT", "Falkland Island Time", "south america"),
        (66, -2, 0, "FNT", "Fernando de Noronha Time", "south america"),
        (67, -6, 0, "GALT", "Galapagos Time", "pacific"),
        (68, -9, 0, "GAMT", "Gambier Time", "pacific"),
        (69, 4, 0, "GET", "Georgia Standard Time", "asia"),
        (70, -3, 0, "GFT", "French Guiana Time", "south america"),
        (71, 12, 0, "GILT", "Gilbert Island Time", "pacific"),
        (72, 0, 0, "GMT", "Greenwich Mean Time", "europe"),
        (73, 4, 0, "GST", "Gulf Standard Time", "asia"),
        (74, -2, 0, "GST", "South Georgia Time", "south america"),
        (75, -4, 0, "GYT", "Guyana Time", "south america"),
        (76, 8, 0, "HKT", "Hong Kong Time", "asia"),
        (77, 7, 0, "HOVT", "Hovd Time", "asia"),
        (78, 7, 0, "ICT", "Indochina Time", "asia"),
        (79, 6, 0, "IOT", "Indian Chagos Time", "indian ocean"),
        (80, 8, 0, "IRKT", "Irkutsk Time", "asia"),
        (81, 3, 30, "IRST", "Iran Standard Time", "asia"),
        (82, 1, 0, "IST", "Irish Standard Time", "europe"),
        (83, 2, 0, "IST", "Israel Standard Time", "asia"),
        (84, 6, 0, "KGT", "Kyrgyzstan Time", "asia"),
        (85, 11, 0, "KOST", "Kosrae Time", "pacific"),
        (86, 7, 0, "KRAT", "Krasnoyarsk Time", "asia"),
        (87, 9, 0, "KST", "Korea Standard Time", "asia"),
        (88, 4, 0, "KUYT", "Kuybyshev Time", "europe"),
        (89, 10, 30, "LHST", "Lord Howe Standard Time", "australia"),
        (90, 14, 0, "LINT", "Line Islands Time", "pacific"),
        (91, 10, 0, "MAGT", "Magadan Time", "asia"),
        (92, -9, -30, "MART", "Marquesas Time", "pacific"),
        (93, 5, 0, "MAWT", "Mawson Time", "antarctica"),
        (94, 12, 0, "MHT", "Marshall Islands Time", "pacific"),
        (95, 6, 30, "MMT", "Myanmar Time", "asia"),
        (96, 4, 0, "MUT", "Mauritius Time", "africa"),
        (97, 5, 0, "MVT", "Maldives Time", "asia"),
        (98, 8, 0, "MYT", "Malaysia Time", "asia"),
        (99, 11, 0, "NCT", "New Caledonia Time", "pacific"),
        (100, 6, 0, "NOVT", "Novosibirsk Time", "asia"),
        (101, 5, 45, "NPT", "Nepal Time", "asia"),
        (102, 12, 0, "NRT", "Nauru Time", "pacific"),
        (103, -11, 0, "NUT", "Niue Time", "pacific"),
        (104, 6, 0, "OMST", "Omsk Standard Time", "asia"),
        (105, 5, 0, "ORAT", "Oral Time", "asia"),
        (106, -5, 0, "PET", "Peru Time", "south america"),
        (107, 12, 0, "PETT", "Kamchatka Time", "asia"),
        (108, 10, 0, "PGT", "Papua New Guinea Time", "pacific"),
        (109, 13, 0, "PHOT", "Phoenix Island Time", "pacific"),
        (110, 8, 0, "PHT", "Philippine Time", "asia"),
        (111, 5, 0, "PKT", "Pakistan Standard Time", "asia"),
        (112, -3, 0, "PMST", "Pierre & Miquelon Standard Time", "north america"),
        (113, 11, 0, "PONT", "Pohnpei Standard Time", "pacific"),
        (114, -8, 0, "PST", "Pitcairn Standard Time", "pacific"),
        (115, 9, 0, "PWT", "Palau Time", "pacific"),
        (116, -4, 0, "PYT", "Paraguay Time", "south america"),
        (117, 6, 0, "QYZT", "Qyzylorda Time", "asia"),
        (118, 4, 0, "RET", "Reunion Time", "africa"),
        (119, -3, 0, "ROTT", "Rothera Time", "antarctica"),
        (120, 10, 0, "SAKT", "Sakhalin Time", "asia"),
        (121, 4, 0, "SAMT", "Samara Time", "europe"),
        (122, 2, 0, "SAST", "South Africa Standard Time", "africa"),
        (123, 11, 0, "SBT", "Solomon Islands Time", "pacific"),
        (124, 4, 0, "SCT", "Seychelles Time", "africa"),
        (125, 8, 0, "SGT", "Singapore Time", "asia"),
        (126, 11, 0, "SRET", "Srednekolymsk Time", "asia"),
        (127, -3, 0, "SRT", "Suriname Time", "south america"),
        (128, -11, 0, "SST", "Samoa Standard Time", "pacific"),
        (129, 3, 0, "SYOT", "Syowa Time", "antarctica"),
        (130, -10, 0, "TAHT", "Tahiti Time", "pacific"),
        (131, 5, 0, "TFT", "French Southern and Antarctic Time", "indian ocean"),
        (132, 5, 0, "TJT", "Tajikistan Time", "asia"),
        (133, 13, 0, "TKT", "Tokelau Time", "pacific"),
        (134, 9, 0, "TLT", "East Timor Time", "asia"),
        (135, 5, 0, "TMT", "Turkmenistan Time", "asia"),
        (136, 13, 0, "TOT", "Tonga Time", "pacific"),
        (137, 12, 0, "TVT", "Tuvalu Time", "pacific"),
        (138, 8, 0, "ULAT", "Ulaanbaatar Time", "asia"),
        (139, -3, 0, "UYT", "Uruguay Time", "south america"),
        (140, 5, 0, "UZT", "Uzbekistan Time", "asia"),
        (141, -4, -30, "VET", "Venezuelan Standard Time", "south america"),
        (142, 10, 0, "VLAT", "Vladivostok Time", "asia"),
        (143, 6, 0, "VOST", "Vostok Time", "antarctica"),
        (144, 11, 0, "VUT", "Vanuatu Time", "pacific"),
        (145, 12, 0, "WAKT", "Wake Time", "pacific"),
        (146, 0, 0, "WET", "Western European Time", "europe"),
        (147, 12, 0, "WFT", "Wallis and Futuna Time", "pacific"),
        (148, -3, 0, "WGT", "West Greenland Time", "north america"),
        (149, 7, 0, "WIB", "Western Indonesian Time", "asia"),
        (150, 9, 0, "WIT", "Eastern Indonesian Time", "asia"),
        (151, 8, 0, "WITA", "Central Indonesian Time", "asia"),
        (152, 13, 0, "WST", "West Samoa Time", "pacific"),
        (153, 0, 0, "WT", "Western Sahara Standard Time", "africa"),
        (154, 9, 0, "YAKT", "Yakutsk Time", "asia"),
        (155, 10, 0, "YAPT", "Yap Time", "pacific"),
        (156, 5, 0, "YEKT", "Yekaterinburg Time", "asia"),
    ),
    Duration(),
)
"""``tuple``: hidden standard time zones, ids ``STANDARD_ID | 28..156``."""

_BY_ID: Final[dict[int, ZoneRecord]] = {
    record.id: record
    for table in (
        STANDARD_ZONES,
        DAYLIGHT_ZONES,
        MILITARY_ZONES,
        EXTRA_STANDARD_ZONES,
        EXTRA_DAYLIGHT_ZONES,
    )
    for record in table
}


class ZonePair(NamedTuple):
    """Standard/daylight variants of one IANA zone."""

    iana_name: str
    standard_id: int
    daylight_id: int | None


def _pair(iana_name: str, standard: int, daylight: int | None = None) -> ZonePair:
    return ZonePair(
        iana_name,
        makeId(STANDARD_ID, standard),
        None if daylight is None else makeId(DAYLIGHT_ID, daylight),
    )


ZONE_PAIRS: Final[tuple[ZonePair, ...]] = (
    _pair("Australia/Adelaide", 0, 0),
    _pair("Australia/Sydney", 1, 2),
    _pair("America/Anchorage", 2, 3),
    _pair("America/Halifax", 3, 1),
    _pair("Australia/Perth", 4, 4),
    _pair("Europe/Paris", 5, 7),
    _pair("America/Winnipeg", 6, 6),
    _pair("Europe/Helsinki", 8, 9),
    _pair("America/Toronto", 9, 8),
    _pair("America/Adak", 10, 10),
    _pair("Europe/Moscow", 11, 13),
    _pair("America/Edmonton", 12, 12),
    _pair("America/St_Johns", 14, 14),
    _pair("Pacific/Auckland", 15, 15),
    _pair("America/Vancouver", 16, 16),
    _pair("Etc/UTC", 17),
    _pair("Asia/Kolkata", 24),
    _pair("Asia/Tokyo", 26),
    _pair("Europe/London", 72, 5),
    _pair("Europe/Dublin", 82, 11),
    _pair("Europe/Lisbon", 146, 17),
)
"""``tuple``: fixed pairing between catalog ids and IANA names."""


def wrapLongitude(longitude: float) -> float:
    """Wrap `longitude` in radians into ``[-pi, pi]``."""
    while longitude < -PI:
        longitude += TWOPI
    while longitude > PI:
        longitude -= TWOPI
    return longitude


def idealLongitude(record: ZoneRecord) -> float:
    """Return the meridian, in radians, at which `record`'s offset equals mean solar time."""
    return record.offset.getTotalSeconds() / 43200.0 * PI


class ZoneCatalog:
    """Resolves :class:`.ZoneRecord` objects from coordinates, names and ids.

    Args:
        database (:class:`.ZoneDatabase`, optional): fallback for anything the static tables do not
            cover. Without one, lookups only use the static tables.
        borders (:class:`.BoundingBoxBorders`, optional): region membership tests.
    """

    def __init__(
        self,
        database: ZoneDatabase | None = None,
        borders: BoundingBoxBorders | None = None,
    ):
        self.database = database
        self.borders = borders if borders is not None else BoundingBoxBorders()

    @staticmethod
    def primaryTable(dst_set: int) -> tuple[ZoneRecord, ...] | None:
        """Return the primary table for a zone set, or ``None`` for an unknown set."""
        if dst_set == DST_SET_DAYLIGHT:
            return DAYLIGHT_ZONES
        if dst_set == DST_SET_MILITARY:
            return MILITARY_ZONES
        if dst_set == DST_SET_STANDARD:
            return STANDARD_ZONES
        return None

    @staticmethod
    def extraTable(dst_set: int) -> tuple[ZoneRecord, ...]:
        """Return the hidden table for a zone set; military zones have none."""
        if dst_set == DST_SET_DAYLIGHT:
            return EXTRA_DAYLIGHT_ZONES
        if dst_set == DST_SET_STANDARD:
            return EXTRA_STANDARD_ZONES
        return ()

    @staticmethod
    def isHidden(record: ZoneRecord) -> bool:
        """Return whether `record` comes from one of the extra tables."""
        return record in EXTRA_STANDARD_ZONES or record in EXTRA_DAYLIGHT_ZONES

    def guess(self, latitude: float, longitude: float, dst_set: int) -> ZoneRecord | None:
        """Guess the zone of a coordinate.

        The database is asked first. Without a definite answer, New Zealand and Tasmania are
        recognized by their bounding boxes, and anywhere else the entry whose ideal longitude is
        nearest to `longitude` is used.

        Args:
            latitude (``float``): latitude in radians
            longitude (``float``): longitude in radians
            dst_set (``int``): ``DST_SET_STANDARD``, ``DST_SET_DAYLIGHT`` or ``DST_SET_MILITARY``

        Returns:
            :class:`.ZoneRecord`: best guess, or ``None`` for an unknown `dst_set`.
        """
        if self.database is not None:
            if (record := self.database.byCoordinate(latitude, longitude, dst_set)) is not None:
                return record

        if self.borders.pointInRegion(latitude, longitude, NEW_ZEALAND):
            if dst_set == DST_SET_STANDARD:
                return STANDARD_ZONES[15]
            if dst_set == DST_SET_DAYLIGHT:
                return DAYLIGHT_ZONES[15]
        elif self.borders.pointInRegion(latitude, longitude, TASMANIA):
            if dst_set == DST_SET_STANDARD:
                return STANDARD_ZONES[1]
            if dst_set == DST_SET_DAYLIGHT:
                return DAYLIGHT_ZONES[2]

        if (table := self.primaryTable(dst_set)) is None:
            return None

        longitude = wrapLongitude(longitude)
        best, variation = None, TWOPI
        for record in table:
            difference = abs(longitude - idealLongitude(record))
            if variation > difference:
                best, variation = record, difference
        return best

    def fromName(self, name: str, dst_set: int) -> ZoneRecord | None:
        """Find a zone by code or full name, ignoring case.

        The primary table of `dst_set` is searched first, then its extra table, then the database,
        which also understands IANA names such as ``"America/Edmonton"``.
        """
        if (table := self.primaryTable(dst_set)) is None:
            return None
        for record in (*table, *self.extraTable(dst_set)):
            if record.matches(name):
                return record
        if self.database is not None:
            return self.database.byName(name, dst_set)
        return None

    def fromId(self, zone_id: int) -> ZoneRecord | None:
        """Find a zone by id; dynamic ids are answered by the database only."""
        if isDynamic(zone_id):
            return None if self.database is None else self.database.byId(zone_id)
        return _BY_ID.get(zone_id)

    def current(
        self,
        offset: Duration,
        dst_enabled: bool,
        dst_set: int,
    ) -> tuple[ZoneRecord | None, bool]:
        """Reverse lookup of a raw offset.

        Args:
            offset (:class:`.Duration`): raw timezone offset
            dst_enabled (``bool``): whether the location observes DST, selects the daylight tables
            dst_set (``int``): ``DST_SET_MILITARY`` forces the military table

        Returns:
            ``tuple``: the matching record or ``None``, and whether it was found in an extra table.
        """
        if dst_set == DST_SET_MILITARY:
            primary, extra = MILITARY_ZONES, ()
        elif dst_enabled:
            primary, extra = DAYLIGHT_ZONES, EXTRA_DAYLIGHT_ZONES
        else:
            primary, extra = STANDARD_ZONES, EXTRA_STANDARD_ZONES

        for record in primary:
            if record.offset == offset:
                return record, False
        for record in extra:
            if record.offset == offset:
                return record, True
        return None, False

    @staticmethod
    def upgrade(zone_id: int) -> tuple[str, bool] | None:
        """Map a catalog id onto its IANA name and whether it is the daylight variant."""
        for pair in ZONE_PAIRS:
            if pair.standard_id == zone_id:
                return pair.iana_name, False
            if pair.daylight_id == zone_id:
                return pair.iana_name, True
        return None

    @staticmethod
    def downgrade(iana_name: str, daylight: bool) -> int | None:
        """Map an IANA name back onto a catalog id.

        Zones without a daylight variant return their standard id regardless of `daylight`.
        """
        for pair in ZONE_PAIRS:
            if pair.iana_name.casefold() == iana_name.casefold():
                if daylight and pair.daylight_id is not None:
                    return pair.daylight_id
                return pair.standard_id
        return None

    def toDaylight(self, record: ZoneRecord) -> ZoneRecord | None:
        """Return the daylight variant of `record`, or ``None`` when it has none."""
        if record.hasDST:
            return record
        if isDynamic(record.id):
            if self.database is None:
                return None
            return self.database.byName(record.name, DST_SET_DAYLIGHT)
        for pair in ZONE_PAIRS:
            if pair.standard_id == record.id and pair.daylight_id is not None:
                return _BY_ID[pair.daylight_id]
        return None

    def toStandard(self, record: ZoneRecord) -> ZoneRecord | None:
        """Return the standard variant of `record`, or ``None`` when it is not paired."""
        if not record.hasDST:
            return record
        if isDynamic(record.id):
            if self.database is None:
                return None
            return self.database.byName(record.name, DST_SET_STANDARD)
        for pair in ZONE_PAIRS:
            if pair.daylight_id == record.id:
                return _BY_ID[pair.standard_id]
        return None
