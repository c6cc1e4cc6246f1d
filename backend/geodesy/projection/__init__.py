"""
Projection Module
Handles lat/lon <-> UTM projection and lazily converted UTM coordinates
"""
from .ellipsoid import Ellipsoid, WGS84
from .utm_engine import (
    OUTSIDE_GRID_LETTER,
    UTMFix,
    lat_lon_to_utm,
    lat_lon_to_utm_wgs84,
    utm_to_lat_lon,
    utm_to_lat_lon_wgs84,
)
from .utm_coordinate import CacheState, CoordType, LatLonCoordinate, UTMCoordinate
from .utm_manager import UTMManager
from .transformer import ReferenceTransformer

__all__ = [
    "Ellipsoid",
    "WGS84",
    "OUTSIDE_GRID_LETTER",
    "UTMFix",
    "lat_lon_to_utm",
    "lat_lon_to_utm_wgs84",
    "utm_to_lat_lon",
    "utm_to_lat_lon_wgs84",
    "CacheState",
    "CoordType",
    "LatLonCoordinate",
    "UTMCoordinate",
    "UTMManager",
    "ReferenceTransformer",
]
