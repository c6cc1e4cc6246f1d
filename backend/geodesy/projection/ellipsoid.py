"""
Reference Ellipsoids
Semi-major axis / flattening pairs that parameterize the projection math
"""
import logging
from dataclasses import dataclass

from pyproj import Geod
from pyproj.exceptions import GeodError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ellipsoid:
    """
    Reference ellipsoid described by its semi-major axis (meters) and flattening
    """

    name: str
    a: float
    f: float

    @property
    def e2(self) -> float:
        """First eccentricity squared"""
        return 2 * self.f - self.f * self.f

    @property
    def ep2(self) -> float:
        """Second eccentricity squared"""
        return self.e2 / (1 - self.e2)

    @property
    def b(self) -> float:
        """Semi-minor axis in meters"""
        return self.a * (1 - self.f)

    @classmethod
    def from_name(cls, name: str) -> "Ellipsoid":
        """
        Look up a named ellipsoid in PROJ's ellipsoid table

        Args:
            name: PROJ ellipsoid identifier (e.g. "WGS84", "GRS80", "clrk66")

        Returns:
            Ellipsoid: parameters read from PROJ

        Raises:
            ValueError: if PROJ does not know the ellipsoid
        """
        try:
            geod = Geod(ellps=name)
        except (KeyError, GeodError) as e:
            raise ValueError(f"Unknown ellipsoid: {name}") from e

        logger.debug(f"📐 Loaded ellipsoid {name}: a={geod.a}, f={geod.f}")
        return cls(name=name, a=geod.a, f=geod.f)


# The fixed reference ellipsoid for UTM coordinates (same as GPS)
WGS84 = Ellipsoid(name="WGS84", a=6378137.0, f=1 / 298.257223563)
