"""
UTM Projection Engine
Pure lat/lon <-> UTM transforms using the ellipsoidal Transverse Mercator series

Based on the standard UTM conversion formulas from USGS (Snyder, "Map
Projections - A Working Manual", 1987). The functions are stateless and take
the ellipsoid as (semi-major axis, flattening); the *_wgs84 variants fix those
to the WGS84 constants.

Numeric inputs are never rejected. Latitudes and longitudes outside their
nominal ranges project to whatever the series produces. The only boundary
signal is the OUTSIDE_GRID_LETTER band for latitudes outside [-80, 84].
Non-finite input (NaN, +/-inf) still yields a zone and letter, with NaN
easting and northing.
"""
import logging
import math
from typing import NamedTuple, Tuple

from .ellipsoid import WGS84, Ellipsoid

logger = logging.getLogger(__name__)

# UTM constants
SCALE_FACTOR = 0.9996
FALSE_EASTING = 500000.0
FALSE_NORTHING_SOUTH = 10000000.0
ZONE_WIDTH_DEGREES = 6

# Latitude bands from 80S to 84N, 8 degrees each (X is stretched to 12)
BAND_LETTERS = "CDEFGHJKLMNPQRSTUVWX"
BAND_HEIGHT_DEGREES = 8
MIN_GRID_LATITUDE = -80.0
MAX_GRID_LATITUDE = 84.0
OUTSIDE_GRID_LETTER = "*"

# With the outside-grid letter, northings below this (or at or above the
# southern false northing) are taken as southern.
# Outside the grid the forward projection yields < ~1.2e6 (south) or > ~8.8e6 (north).
_HEMISPHERE_SPLIT_NORTHING = FALSE_NORTHING_SOUTH / 2


class UTMFix(NamedTuple):
    """A position on the UTM grid"""

    zone_number: int
    zone_letter: str
    easting: float
    northing: float


def zone_number_for(lon: float) -> int:
    """
    Longitudinal UTM zone (1..60) for a longitude in degrees

    Out-of-range longitudes clamp to the edge zones; NaN maps to zone 1.
    """
    if math.isnan(lon):
        return 1
    if math.isinf(lon):
        return 60 if lon > 0 else 1
    zone_number = int(math.floor((lon + 180) / ZONE_WIDTH_DEGREES)) + 1
    return min(max(zone_number, 1), 60)


def zone_letter_for(lat: float) -> str:
    """
    Latitude band letter for a latitude in degrees

    Returns OUTSIDE_GRID_LETTER when the latitude is outside [-80, 84].
    """
    if not (MIN_GRID_LATITUDE <= lat <= MAX_GRID_LATITUDE):
        return OUTSIDE_GRID_LETTER

    index = int(math.floor((lat - MIN_GRID_LATITUDE) / BAND_HEIGHT_DEGREES))
    return BAND_LETTERS[min(index, len(BAND_LETTERS) - 1)]


def central_meridian(zone_number: int) -> float:
    """Central meridian of a zone in degrees"""
    return (zone_number - 1) * ZONE_WIDTH_DEGREES - 180 + 3


def is_southern_band(zone_letter: str) -> bool:
    """True for the bands C..M (south of the equator)"""
    return zone_letter.upper() < "N"


def is_band_letter(zone_letter: str) -> bool:
    return len(zone_letter) == 1 and zone_letter.upper() in BAND_LETTERS


def is_southern(zone_letter: str, northing: float) -> bool:
    """
    Hemisphere of a UTM position

    A band letter decides on its own. The outside-grid letter carries no
    hemisphere, so the northing decides: at or above the southern false
    northing it is a southern offset, and below the mid-point split it is a
    southern polar-cap northing as the forward projection produces.
    """
    if zone_letter == OUTSIDE_GRID_LETTER:
        return northing >= FALSE_NORTHING_SOUTH or northing < _HEMISPHERE_SPLIT_NORTHING
    return is_southern_band(zone_letter)


def _meridian_arc(phi: float, a: float, e2: float) -> float:
    """Distance along the meridian from the equator to latitude phi (radians)"""
    e4 = e2 * e2
    e6 = e4 * e2
    return a * (
        (1 - e2 / 4 - 3 * e4 / 64 - 5 * e6 / 256) * phi
        - (3 * e2 / 8 + 3 * e4 / 32 + 45 * e6 / 1024) * math.sin(2 * phi)
        + (15 * e4 / 256 + 45 * e6 / 1024) * math.sin(4 * phi)
        - (35 * e6 / 3072) * math.sin(6 * phi)
    )


def lat_lon_to_utm(lat: float, lon: float, a: float, f: float) -> UTMFix:
    """
    Forward projection: geographic coordinates to UTM

    Args:
        lat: Latitude in decimal degrees
        lon: Longitude in decimal degrees
        a: Ellipsoid semi-major axis in meters
        f: Ellipsoid flattening

    Returns:
        UTMFix: zone number, band letter (or '*' outside the grid), easting, northing
    """
    zone_number = zone_number_for(lon)
    zone_letter = zone_letter_for(lat)
    if zone_letter == OUTSIDE_GRID_LETTER:
        logger.debug(f"⚠️ Latitude {lat} is outside the UTM grid, projecting best-effort")

    if not (math.isfinite(lat) and math.isfinite(lon)):
        logger.debug(f"⚠️ Non-finite input ({lat}, {lon}), easting/northing undefined")
        return UTMFix(zone_number, zone_letter, math.nan, math.nan)

    ellipsoid = Ellipsoid(name="", a=a, f=f)
    e2 = ellipsoid.e2
    ep2 = ellipsoid.ep2

    phi = math.radians(lat)
    delta_lambda = math.radians(lon - central_meridian(zone_number))

    sin_phi = math.sin(phi)
    cos_phi = math.cos(phi)
    tan_phi = math.tan(phi)

    N = a / math.sqrt(1 - e2 * sin_phi * sin_phi)
    T = tan_phi * tan_phi
    C = ep2 * cos_phi * cos_phi
    A = cos_phi * delta_lambda
    M = _meridian_arc(phi, a, e2)

    # Float products overflow to inf where ** would raise
    A2 = A * A
    A3 = A2 * A
    A4 = A2 * A2

    easting = SCALE_FACTOR * N * (
        A
        + (1 - T + C) * A3 / 6
        + (5 - 18 * T + T * T + 72 * C - 58 * ep2) * A3 * A2 / 120
    ) + FALSE_EASTING

    northing = SCALE_FACTOR * (
        M
        + N * tan_phi * (
            A2 / 2
            + (5 - T + 9 * C + 4 * C * C) * A4 / 24
            + (61 - 58 * T + T * T + 600 * C - 330 * ep2) * A4 * A2 / 720
        )
    )
    if lat < 0:
        northing += FALSE_NORTHING_SOUTH

    logger.debug(f"🧭 ({lat:.8f}, {lon:.8f}) → {zone_number}{zone_letter} ({easting:.3f}, {northing:.3f})")
    return UTMFix(zone_number, zone_letter, easting, northing)


def utm_to_lat_lon(
    zone_number: int,
    zone_letter: str,
    easting: float,
    northing: float,
    a: float,
    f: float,
) -> Tuple[float, float]:
    """
    Inverse projection: UTM to geographic coordinates

    The hemisphere comes from the band letter. For the outside-grid letter the
    northing decides, following the forward false northing convention.
    Results are not checked against the zone's nominal coverage.

    Args:
        zone_number: Longitudinal zone (1..60)
        zone_letter: Band letter or '*'
        easting: Easting in meters
        northing: Northing in meters
        a: Ellipsoid semi-major axis in meters
        f: Ellipsoid flattening

    Returns:
        tuple: (latitude, longitude) in decimal degrees
    """
    southern = is_southern(zone_letter, northing)

    ellipsoid = Ellipsoid(name="", a=a, f=f)
    e2 = ellipsoid.e2
    ep2 = ellipsoid.ep2
    e4 = e2 * e2
    e6 = e4 * e2

    # Remove false easting/northing
    x = easting - FALSE_EASTING
    y = northing - (FALSE_NORTHING_SOUTH if southern else 0.0)

    # Footpoint latitude
    M = y / SCALE_FACTOR
    mu = M / (a * (1 - e2 / 4 - 3 * e4 / 64 - 5 * e6 / 256))

    e1 = (1 - math.sqrt(1 - e2)) / (1 + math.sqrt(1 - e2))
    phi1 = (
        mu
        + (3 * e1 / 2 - 27 * e1 ** 3 / 32) * math.sin(2 * mu)
        + (21 * e1 ** 2 / 16 - 55 * e1 ** 4 / 32) * math.sin(4 * mu)
        + (151 * e1 ** 3 / 96) * math.sin(6 * mu)
        + (1097 * e1 ** 4 / 512) * math.sin(8 * mu)
    )

    sin_phi1 = math.sin(phi1)
    cos_phi1 = math.cos(phi1)
    tan_phi1 = math.tan(phi1)

    N1 = a / math.sqrt(1 - e2 * sin_phi1 * sin_phi1)
    T1 = tan_phi1 * tan_phi1
    C1 = ep2 * cos_phi1 * cos_phi1
    R1 = a * (1 - e2) / (1 - e2 * sin_phi1 * sin_phi1) ** 1.5
    D = x / (N1 * SCALE_FACTOR)
    D2 = D * D
    D3 = D2 * D
    D4 = D2 * D2

    lat_rad = phi1 - (N1 * tan_phi1 / R1) * (
        D2 / 2
        - (5 + 3 * T1 + 10 * C1 - 4 * C1 * C1 - 9 * ep2) * D4 / 24
        + (61 + 90 * T1 + 298 * C1 + 45 * T1 * T1 - 252 * ep2 - 3 * C1 * C1) * D4 * D2 / 720
    )
    lon_offset_rad = (
        D
        - (1 + 2 * T1 + C1) * D3 / 6
        + (5 - 2 * C1 + 28 * T1 - 3 * C1 * C1 + 8 * ep2 + 24 * T1 * T1) * D3 * D2 / 120
    ) / cos_phi1

    lat = math.degrees(lat_rad)
    lon = central_meridian(zone_number) + math.degrees(lon_offset_rad)

    logger.debug(f"🧭 {zone_number}{zone_letter} ({easting:.3f}, {northing:.3f}) → ({lat:.8f}, {lon:.8f})")
    return lat, lon


def lat_lon_to_utm_wgs84(lat: float, lon: float) -> UTMFix:
    """Forward projection on the WGS84 ellipsoid"""
    return lat_lon_to_utm(lat, lon, WGS84.a, WGS84.f)


def utm_to_lat_lon_wgs84(
    zone_number: int, zone_letter: str, easting: float, northing: float
) -> Tuple[float, float]:
    """Inverse projection on the WGS84 ellipsoid"""
    return utm_to_lat_lon(zone_number, zone_letter, easting, northing, WGS84.a, WGS84.f)
