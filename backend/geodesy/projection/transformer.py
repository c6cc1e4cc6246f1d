"""
Reference Coordinate Transformer
PROJ-backed WGS84 <-> UTM transforms used to verify the series engine
"""
import logging
import math
from typing import Dict, Optional, Tuple

from pyproj import CRS, Transformer

from config import settings

from .utm_engine import lat_lon_to_utm_wgs84
from .utm_manager import UTMManager

logger = logging.getLogger(__name__)


class ReferenceTransformer:
    """
    Coordinate transformer using pyproj for WGS84 UTM zones (EPSG 326xx / 327xx)

    Transformers are created lazily and cached per zone, with separate caches
    for each direction.
    """

    def __init__(self):
        """Initialize reference transformer with WGS84 datum"""
        self.wgs84 = CRS.from_epsg(4326)
        self.utm_manager = UTMManager()

        self._geo_to_utm_transformers: Dict[str, Transformer] = {}
        self._utm_to_geo_transformers: Dict[str, Transformer] = {}

    def _get_transformer(self, zone_number: int, southern: bool, direction: str) -> Transformer:
        hemisphere = "S" if southern else "N"
        cache_key = f"{zone_number}{hemisphere}"

        if direction == "geo_to_utm":
            cache = self._geo_to_utm_transformers
        else:
            cache = self._utm_to_geo_transformers

        if cache_key not in cache:
            utm_epsg = self.utm_manager.get_epsg_code(zone_number, hemisphere)
            utm_crs = CRS.from_epsg(utm_epsg)
            if direction == "geo_to_utm":
                cache[cache_key] = Transformer.from_crs(self.wgs84, utm_crs, always_xy=True)
            else:
                cache[cache_key] = Transformer.from_crs(utm_crs, self.wgs84, always_xy=True)
            logger.debug(f"📍 Created {direction} transformer for zone {cache_key} (EPSG:{utm_epsg})")

        return cache[cache_key]

    def lat_lon_to_utm(self, lat: float, lon: float, zone_number: int, southern: bool) -> Tuple[float, float]:
        """
        Project geographic coordinates into a given UTM zone with PROJ

        Returns:
            tuple: (easting, northing) in meters
        """
        transformer = self._get_transformer(zone_number, southern, "geo_to_utm")
        # always_xy: input (lon, lat), output (east, north)
        easting, northing = transformer.transform(lon, lat)
        return easting, northing

    def utm_to_lat_lon(self, easting: float, northing: float, zone_number: int, southern: bool) -> Tuple[float, float]:
        """
        Inverse-project UTM coordinates with PROJ

        Returns:
            tuple: (latitude, longitude) in decimal degrees
        """
        transformer = self._get_transformer(zone_number, southern, "utm_to_geo")
        lon, lat = transformer.transform(easting, northing)
        return lat, lon

    def deviation(self, lat: float, lon: float) -> float:
        """
        Planar distance in meters between the series engine and PROJ for one point

        Both are evaluated in the zone the series engine picks for the point.
        """
        fix = lat_lon_to_utm_wgs84(lat, lon)
        easting, northing = self.lat_lon_to_utm(lat, lon, fix.zone_number, lat < 0)
        distance = math.hypot(fix.easting - easting, fix.northing - northing)
        logger.debug(f"🧮 Series vs PROJ at ({lat:.8f}, {lon:.8f}): {distance:.6f} m")
        return distance

    def agrees_with_series(self, lat: float, lon: float, tolerance: Optional[float] = None) -> bool:
        """Check that the series engine and PROJ agree within tolerance meters"""
        if tolerance is None:
            tolerance = settings.UTM_REFERENCE_TOLERANCE_M
        distance = self.deviation(lat, lon)
        if distance > tolerance:
            logger.warning(f"⚠️ Series engine deviates {distance:.3f} m from PROJ at ({lat}, {lon})")
            return False
        return True
