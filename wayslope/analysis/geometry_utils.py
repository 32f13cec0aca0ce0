"""
Geometry utilities for distance calculations
"""

import math
from typing import Tuple

EARTH_RADIUS_KM = 6371.0


class GeometryUtils:
    """Utility functions for geometric operations"""

    @staticmethod
    def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """
        Great-circle distance in kilometres on a sphere of radius 6371 km
        """
        d_lat = math.radians(lat2 - lat1)
        d_lon = math.radians(lon2 - lon1)
        phi1 = math.radians(lat1)
        phi2 = math.radians(lat2)

        a = (
            math.sin(d_lat / 2) * math.sin(d_lat / 2)
            + math.sin(d_lon / 2) * math.sin(d_lon / 2) * (math.cos(phi1) * math.cos(phi2))
        )
        # Rounding can push a just past 1 for antipodal points
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(max(0.0, 1 - a)))
        return EARTH_RADIUS_KM * c

    @staticmethod
    def haversine_m(start: Tuple[float, float], end: Tuple[float, float]) -> float:
        """Great-circle distance in meters between two (lat, lon) points"""
        return GeometryUtils.haversine_km(start[0], start[1], end[0], end[1]) * 1000.0
