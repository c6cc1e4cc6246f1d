"""
UTM Manager
Handles UTM zone designators ("33T") and zone metadata
"""
import logging
from typing import Tuple

from .utm_engine import (
    BAND_HEIGHT_DEGREES,
    BAND_LETTERS,
    MAX_GRID_LATITUDE,
    MIN_GRID_LATITUDE,
    OUTSIDE_GRID_LETTER,
    ZONE_WIDTH_DEGREES,
    central_meridian,
    is_southern_band,
    zone_letter_for,
    zone_number_for,
)

logger = logging.getLogger(__name__)


class UTMManager:
    """
    Manages UTM zone determination and utilities

    Zones are designated by number and latitude band letter, e.g. "33T".
    Lookups on designator strings return result dicts with a "success" key.
    """

    def get_utm_zone(self, lat: float, lon: float) -> str:
        """
        Determine the UTM zone designator for lat/lon coordinates

        Args:
            lat: Latitude in decimal degrees
            lon: Longitude in decimal degrees

        Returns:
            str: Zone designator (e.g. "13T"), with '*' as letter outside the grid
        """
        utm_zone = f"{zone_number_for(lon)}{zone_letter_for(lat)}"
        logger.debug(f"📍 Determined UTM zone {utm_zone} for coordinates ({lat}, {lon})")
        return utm_zone

    def parse_zone(self, utm_zone: str) -> Tuple[int, str]:
        """
        Parse a zone designator into (zone number, band letter)

        Accepts "33T", "33t" and "utm_33t".

        Raises:
            ValueError: if the designator is malformed or out of range
        """
        zone_str = utm_zone.strip().upper().replace("UTM_", "")
        if len(zone_str) < 2:
            raise ValueError(f"Cannot parse UTM zone: {utm_zone}")

        zone_number = int(zone_str[:-1])
        zone_letter = zone_str[-1]

        if not (1 <= zone_number <= 60):
            raise ValueError(f"Invalid UTM zone number: {zone_number}")
        if zone_letter not in BAND_LETTERS and zone_letter != OUTSIDE_GRID_LETTER:
            raise ValueError(f"Invalid UTM band letter: {zone_letter}")

        return zone_number, zone_letter

    def get_epsg_code(self, zone_number: int, hemisphere: str) -> int:
        """Get the WGS84 EPSG code for a UTM zone"""
        if hemisphere.upper() == "N":
            return 32600 + zone_number  # Northern hemisphere
        else:
            return 32700 + zone_number  # Southern hemisphere

    def get_zone_bounds(self, utm_zone: str) -> dict:
        """
        Get the geographic bounds of a UTM grid zone (zone number + band)

        Args:
            utm_zone: Zone designator (e.g. "13T")

        Returns:
            dict: Zone bounds with min/max lat/lon
        """
        try:
            zone_number, zone_letter = self.parse_zone(utm_zone)
        except ValueError as e:
            return {"success": False, "error": f"Zone bounds calculation error: {str(e)}"}

        if zone_letter == OUTSIDE_GRID_LETTER:
            return {"success": False, "error": f"Zone {utm_zone} is outside the UTM grid"}

        # Calculate longitude bounds (6-degree zones)
        min_lon = (zone_number - 1) * ZONE_WIDTH_DEGREES - 180
        max_lon = zone_number * ZONE_WIDTH_DEGREES - 180

        # Latitude bounds come from the band; X is 12 degrees tall
        min_lat = MIN_GRID_LATITUDE + BAND_LETTERS.index(zone_letter) * BAND_HEIGHT_DEGREES
        max_lat = MAX_GRID_LATITUDE if zone_letter == BAND_LETTERS[-1] else min_lat + BAND_HEIGHT_DEGREES

        return {
            "success": True,
            "bounds": {
                "min_lon": min_lon,
                "max_lon": max_lon,
                "min_lat": min_lat,
                "max_lat": max_lat
            },
            "center_lon": (min_lon + max_lon) / 2,
            "center_lat": (min_lat + max_lat) / 2
        }

    def get_zone_info(self, utm_zone: str) -> dict:
        """Get comprehensive information about a UTM grid zone"""
        try:
            zone_number, zone_letter = self.parse_zone(utm_zone)
        except ValueError as e:
            return {"success": False, "error": f"Zone info calculation error: {str(e)}"}

        if zone_letter == OUTSIDE_GRID_LETTER:
            return {"success": False, "error": f"Zone {utm_zone} is outside the UTM grid"}

        hemisphere = "S" if is_southern_band(zone_letter) else "N"

        info = {
            "zone_number": zone_number,
            "zone_letter": zone_letter,
            "hemisphere": hemisphere,
            "central_meridian": central_meridian(zone_number),
            "zone_width_degrees": ZONE_WIDTH_DEGREES,
            "datum": "WGS84",
            "epsg_code": self.get_epsg_code(zone_number, hemisphere)
        }

        bounds_result = self.get_zone_bounds(utm_zone)
        if bounds_result["success"]:
            info["bounds"] = bounds_result["bounds"]
            info["center_lon"] = bounds_result["center_lon"]
            info["center_lat"] = bounds_result["center_lat"]

        return {
            "success": True,
            "zone_info": info
        }

    def is_valid_utm_zone(self, utm_zone: str) -> bool:
        """Check if a zone designator names a zone on the UTM grid"""
        try:
            _, zone_letter = self.parse_zone(utm_zone)
        except ValueError:
            return False
        return zone_letter != OUTSIDE_GRID_LETTER
