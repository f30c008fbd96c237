# -*- coding: utf-8 -*-
"""
geography.py - Geographic calculations
-------------------------------------
Great-circle distances and coordinate helpers used by the analytics engine.
"""
import math
from numbers import Real
from typing import Sequence, Tuple


class GeographyService:
    """Distances and centers for report coordinates, in degrees and kilometers"""

    EARTH_RADIUS_KM = 6371.0088

    @classmethod
    def haversine_distance(cls, lat1: float, lng1: float, lat2: float, lng2: float) -> float:
        """Great-circle distance between two report locations, in kilometers"""
        phi1, phi2 = math.radians(lat1), math.radians(lat2)
        half_dphi = (phi2 - phi1) / 2
        half_dlambda = math.radians(lng2 - lng1) / 2
        h = (
            math.sin(half_dphi) ** 2
            + math.cos(phi1) * math.cos(phi2) * math.sin(half_dlambda) ** 2
        )
        # h can round to just above 1 for antipodal points
        return 2 * cls.EARTH_RADIUS_KM * math.asin(math.sqrt(min(h, 1.0)))

    @staticmethod
    def mean_center(
        latitudes: Sequence[float], longitudes: Sequence[float]
    ) -> Tuple[float, float]:
        """
        Arithmetic mean of the coordinates, as (latitude, longitude).

        This is not a geodesic centroid. It is only meaningful for compact groups of points
        that don't cross the antimeridian.
        """
        if not latitudes or len(latitudes) != len(longitudes):
            raise ValueError("mean_center needs matching, non-empty coordinate lists")
        return sum(latitudes) / len(latitudes), sum(longitudes) / len(longitudes)

    @staticmethod
    def is_valid_coordinate(value) -> bool:
        """Whether `value` is a real, non-NaN number"""
        if value is None or isinstance(value, bool) or not isinstance(value, Real):
            return False
        return not math.isnan(value)
