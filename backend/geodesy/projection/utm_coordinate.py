"""
UTM Coordinate
A position held as both lat/lon and UTM, converting lazily between the two

Either representation can be written. The other one is marked stale and is
only recomputed, once, when it is next read. A latitude outside the UTM grid
(north of 84N or south of 80S) gets the band letter '*'; its easting and
northing are whatever the projection series produces and are best-effort only.

Out-of-range numeric input is not validated anywhere in this module: it
degrades silently through the projection math.
"""
import copy
import logging
import math
import threading
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, NamedTuple, Tuple, Union

from .utm_engine import (
    OUTSIDE_GRID_LETTER,
    UTMFix,
    is_band_letter,
    is_southern,
    lat_lon_to_utm_wgs84,
    utm_to_lat_lon_wgs84,
)
from .utm_manager import UTMManager

logger = logging.getLogger(__name__)

# Fixed-width display string layout. Parsers extract the fields by position.
UTM_ZONE_POS = 0
UTM_ZONE_LEN = 3
UTM_EASTING_POS = 4
UTM_EASTING_LEN = 6
UTM_NORTHING_POS = 11
UTM_NORTHING_LEN = 7

_utm_manager = UTMManager()


def _display_meters(value: float, width: int) -> str:
    """Whole meters zero-padded to width; undefined values fill the field with '*'"""
    if not math.isfinite(value):
        return OUTSIDE_GRID_LETTER * width
    return f"{int(value):0{width}d}"


class CoordType(Enum):
    LAT_LON = "lat_lon"
    UTM = "utm"


class CacheState(Enum):
    """Which representations are current. There is no "both stale" state."""

    LAT_LON_CURRENT = "lat_lon_current"
    UTM_CURRENT = "utm_current"
    BOTH_CURRENT = "both_current"


class _Snapshot(NamedTuple):
    state: CacheState
    latitude: float
    longitude: float
    zone_number: int
    zone_letter: str
    easting: float
    northing: float


@dataclass(frozen=True)
class LatLonCoordinate:
    """
    Plain geographic coordinate on WGS84

    Shares the to_lat_lon() / to_utm() interface with UTMCoordinate so either
    can be the source of a copy or assignment.
    """

    latitude: float
    longitude: float

    coord_type: ClassVar[CoordType] = CoordType.LAT_LON

    def to_lat_lon(self) -> Tuple[float, float]:
        return self.latitude, self.longitude

    def to_utm(self) -> UTMFix:
        return lat_lon_to_utm_wgs84(self.latitude, self.longitude)


Coordinate = Union["UTMCoordinate", LatLonCoordinate]


class UTMCoordinate:
    """
    Coordinate on the UTM grid with a lazily converted lat/lon twin (WGS84)

    Writes go through set_lat_lon() / set_utm(), which make the written
    representation current and the other stale. Reads recompute a stale
    representation once and then serve the cached value.

    Each instance serializes its own flag/field updates with a lock, so a lazy
    recomputation is never observed half-written. Sequencing writes across
    threads remains the caller's job.
    """

    coord_type: ClassVar[CoordType] = CoordType.UTM

    __hash__ = None  # mutable

    def __init__(
        self,
        zone_number: int = 1,
        zone_letter: str = "N",
        easting: float = 0.0,
        northing: float = 0.0,
    ):
        self._lock = threading.Lock()
        self._latitude = 0.0
        self._longitude = 0.0
        self._zone_number = 1
        self._zone_letter = "N"
        self._easting = 0.0
        self._northing = 0.0
        self._state = CacheState.UTM_CURRENT
        self.set_utm(zone_number, zone_letter, easting, northing)

    @classmethod
    def from_lat_lon(cls, lat: float, lon: float) -> "UTMCoordinate":
        coord = cls()
        coord.set_lat_lon(lat, lon)
        return coord

    @classmethod
    def from_utm(cls, zone_number: int, zone_letter: str, easting: float, northing: float) -> "UTMCoordinate":
        return cls(zone_number, zone_letter, easting, northing)

    @classmethod
    def from_coordinate(cls, other: Coordinate) -> "UTMCoordinate":
        coord = cls()
        coord.copy_from(other)
        return coord

    @classmethod
    def from_display_string(cls, text: str) -> "UTMCoordinate":
        """
        Parse a string produced by create_display_string()

        Easting and northing come back in whole meters.

        Raises:
            ValueError: if the text does not follow the fixed-width layout
        """
        if len(text) < UTM_NORTHING_POS + UTM_NORTHING_LEN:
            raise ValueError(f"UTM display string too short: {text!r}")

        zone_token = text[UTM_ZONE_POS:UTM_ZONE_POS + UTM_ZONE_LEN]
        easting_token = text[UTM_EASTING_POS:UTM_EASTING_POS + UTM_EASTING_LEN]
        northing_token = text[UTM_NORTHING_POS:UTM_NORTHING_POS + UTM_NORTHING_LEN]

        zone_number, zone_letter = _utm_manager.parse_zone(zone_token)
        return cls(zone_number, zone_letter, float(int(easting_token)), float(int(northing_token)))

    # -- state -----------------------------------------------------------

    @property
    def state(self) -> CacheState:
        return self._state

    @property
    def lat_lon_stale(self) -> bool:
        return self._state is CacheState.UTM_CURRENT

    @property
    def utm_stale(self) -> bool:
        return self._state is CacheState.LAT_LON_CURRENT

    # -- writes ----------------------------------------------------------

    def set_lat_lon(self, lat: float, lon: float) -> None:
        """Store a geographic position. UTM becomes stale; nothing is projected yet."""
        with self._lock:
            self._latitude = lat
            self._longitude = lon
            self._state = CacheState.LAT_LON_CURRENT

    def set_utm(self, zone_number: int, zone_letter: str, easting: float, northing: float) -> None:
        """
        Store a UTM position. Lat/lon becomes stale.

        Raises:
            ValueError: if zone_letter is neither a band letter nor '*'
        """
        if zone_letter != OUTSIDE_GRID_LETTER and not is_band_letter(zone_letter):
            raise ValueError(f"Invalid UTM band letter: {zone_letter!r}")

        with self._lock:
            self._zone_number = zone_number
            self._zone_letter = zone_letter.upper()
            self._easting = easting
            self._northing = northing
            self._state = CacheState.UTM_CURRENT

    # -- lazy evaluation -------------------------------------------------

    def _ensure_lat_lon_locked(self) -> None:
        if self._state is CacheState.UTM_CURRENT:
            logger.debug(f"🔄 Converting {self._zone_number}{self._zone_letter} UTM to lat/lon")
            self._latitude, self._longitude = utm_to_lat_lon_wgs84(
                self._zone_number, self._zone_letter, self._easting, self._northing
            )
            self._state = CacheState.BOTH_CURRENT

    def _ensure_utm_locked(self) -> None:
        if self._state is CacheState.LAT_LON_CURRENT:
            logger.debug(f"🔄 Converting ({self._latitude}, {self._longitude}) lat/lon to UTM")
            fix = lat_lon_to_utm_wgs84(self._latitude, self._longitude)
            self._zone_number, self._zone_letter, self._easting, self._northing = fix
            self._state = CacheState.BOTH_CURRENT

    def ensure_lat_lon(self) -> None:
        """Bring lat/lon up to date now instead of on the next read"""
        with self._lock:
            self._ensure_lat_lon_locked()

    def ensure_utm(self) -> None:
        """Bring UTM up to date now instead of on the next read"""
        with self._lock:
            self._ensure_utm_locked()

    # -- reads -----------------------------------------------------------

    def get_lat_lon(self) -> Tuple[float, float]:
        with self._lock:
            self._ensure_lat_lon_locked()
            return self._latitude, self._longitude

    def get_utm(self) -> UTMFix:
        with self._lock:
            self._ensure_utm_locked()
            return UTMFix(self._zone_number, self._zone_letter, self._easting, self._northing)

    def get_utm_zone(self) -> Tuple[int, str]:
        fix = self.get_utm()
        return fix.zone_number, fix.zone_letter

    def get_xy(self) -> Tuple[float, float]:
        """Easting and northing as planar x/y in meters"""
        fix = self.get_utm()
        return fix.easting, fix.northing

    def is_outside_grid(self) -> bool:
        return self.get_utm().zone_letter == OUTSIDE_GRID_LETTER

    def to_lat_lon(self) -> Tuple[float, float]:
        return self.get_lat_lon()

    def to_utm(self) -> UTMFix:
        return self.get_utm()

    @property
    def latitude(self) -> float:
        return self.get_lat_lon()[0]

    @property
    def longitude(self) -> float:
        return self.get_lat_lon()[1]

    @property
    def zone_number(self) -> int:
        return self.get_utm().zone_number

    @property
    def zone_letter(self) -> str:
        return self.get_utm().zone_letter

    @property
    def easting(self) -> float:
        return self.get_utm().easting

    @property
    def northing(self) -> float:
        return self.get_utm().northing

    @property
    def epsg_code(self) -> int:
        """WGS84 UTM EPSG code for the current zone and hemisphere"""
        fix = self.get_utm()
        hemisphere = "S" if is_southern(fix.zone_letter, fix.northing) else "N"
        return _utm_manager.get_epsg_code(fix.zone_number, hemisphere)

    # -- copy / assignment -----------------------------------------------

    def _snapshot(self) -> _Snapshot:
        with self._lock:
            return _Snapshot(
                self._state,
                self._latitude,
                self._longitude,
                self._zone_number,
                self._zone_letter,
                self._easting,
                self._northing,
            )

    def copy_from(self, other: Coordinate) -> None:
        """
        Take over another coordinate's position

        A UTMCoordinate is cloned exactly, stale flags included, without
        projecting anything. A LatLonCoordinate is stored as lat/lon.

        Raises:
            TypeError: for anything that is not a coordinate
        """
        if other is self:
            return

        if isinstance(other, UTMCoordinate):
            snapshot = other._snapshot()
            with self._lock:
                self._state = snapshot.state
                self._latitude = snapshot.latitude
                self._longitude = snapshot.longitude
                self._zone_number = snapshot.zone_number
                self._zone_letter = snapshot.zone_letter
                self._easting = snapshot.easting
                self._northing = snapshot.northing
        elif isinstance(other, LatLonCoordinate):
            self.set_lat_lon(other.latitude, other.longitude)
        else:
            raise TypeError(f"Cannot copy coordinate from {type(other).__name__}")

    def assign(self, other: Coordinate) -> "UTMCoordinate":
        """Assignment from any coordinate kind; same semantics as copy_from()"""
        self.copy_from(other)
        return self

    def __copy__(self) -> "UTMCoordinate":
        return UTMCoordinate.from_coordinate(self)

    def __deepcopy__(self, memo) -> "UTMCoordinate":
        clone = copy.copy(self)
        memo[id(self)] = clone
        return clone

    # -- display ---------------------------------------------------------

    def create_display_string(self) -> str:
        """
        Fixed-width UTM text, e.g. ' 8Q 512345 1234567'

        Zone at offset 0 (3 chars, number right-aligned), easting at offset 4
        (6 digits), northing at offset 11 (7 digits). Meters are truncated;
        a NaN or infinite value fills its field with '*'.
        """
        fix = self.get_utm()
        return (
            f"{fix.zone_number:>2d}{fix.zone_letter} "
            f"{_display_meters(fix.easting, UTM_EASTING_LEN)} "
            f"{_display_meters(fix.northing, UTM_NORTHING_LEN)}"
        )

    def create_display_strings(self) -> Tuple[str, str, str]:
        """Zone, easting and northing tokens of the display string"""
        text = self.create_display_string()
        zone = text[UTM_ZONE_POS:UTM_ZONE_POS + UTM_ZONE_LEN]
        easting, northing = self._xy_tokens(text)
        return zone.strip(), easting, northing

    def create_xy_coord_strings(self) -> Tuple[str, str]:
        """Easting and northing tokens of the display string"""
        return self._xy_tokens(self.create_display_string())

    @staticmethod
    def _xy_tokens(text: str) -> Tuple[str, str]:
        easting = text[UTM_EASTING_POS:UTM_EASTING_POS + UTM_EASTING_LEN]
        northing = text[UTM_NORTHING_POS:UTM_NORTHING_POS + UTM_NORTHING_LEN]
        return easting.strip(), northing.strip()

    def __str__(self) -> str:
        return self.create_display_string()

    def __repr__(self) -> str:
        snapshot = self._snapshot()
        if snapshot.state is CacheState.LAT_LON_CURRENT:
            return f"UTMCoordinate(lat={snapshot.latitude}, lon={snapshot.longitude}, utm=stale)"
        if snapshot.state is CacheState.UTM_CURRENT:
            return (
                f"UTMCoordinate(zone={snapshot.zone_number}{snapshot.zone_letter}, "
                f"easting={snapshot.easting}, northing={snapshot.northing}, lat_lon=stale)"
            )
        return (
            f"UTMCoordinate(zone={snapshot.zone_number}{snapshot.zone_letter}, "
            f"easting={snapshot.easting}, northing={snapshot.northing}, "
            f"lat={snapshot.latitude}, lon={snapshot.longitude})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (UTMCoordinate, LatLonCoordinate)):
            return NotImplemented
        return self.get_utm() == other.to_utm()
