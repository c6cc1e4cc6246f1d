"""
Geodesy Module
Geographic and UTM coordinate handling
"""
from .projection import LatLonCoordinate, UTMCoordinate

__all__ = ["LatLonCoordinate", "UTMCoordinate"]
