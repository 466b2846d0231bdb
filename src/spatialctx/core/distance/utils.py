"""
Angle conversion, coordinate normalisation and spherical distance formulas.

The distance formulas take radians and return the central angle in
radians. They are written with numpy so the same code serves scalars
and arrays.
"""

import math
from typing import Tuple, TypeVar

import numpy as np
from numpy.typing import NDArray

T = TypeVar("T", float, NDArray[np.float64])


def norm_lon_deg(lon_deg: float) -> float:
    """
    Wrap a longitude into [-180, 180].

    180 is preserved for positive inputs that wrap exactly onto the
    antimeridian (e.g. 540 -> 180).
    """
    if -180 <= lon_deg <= 180:
        return lon_deg
    off = math.fmod(lon_deg + 180, 360)
    if off < 0:
        return 180 + off
    if off == 0 and lon_deg > 0:
        return 180.0
    return -180 + off


def norm_lat_deg(lat_deg: float) -> float:
    """Fold a latitude into [-90, 90], reflecting over the poles."""
    if -90 <= lat_deg <= 90:
        return lat_deg
    off = abs(math.fmod(lat_deg + 90, 360))
    return (off if off <= 180 else 360 - off) - 90


def degrees_to_dist(degrees: float, radius: float) -> float:
    """Arc length of an angle in degrees on a sphere of the given radius."""
    return math.radians(degrees) * radius


def dist_to_degrees(dist: float, radius: float) -> float:
    """Angle in degrees subtended by an arc length on a sphere."""
    return math.degrees(dist / radius)


def dist_haversine_rad(lat1: T, lon1: T, lat2: T, lon2: T) -> T:
    """
    Central angle by the haversine formula.

    Well-conditioned for both small and near-antipodal separations.
    """
    hsin_x = np.sin((lon1 - lon2) * 0.5)
    hsin_y = np.sin((lat1 - lat2) * 0.5)
    h = hsin_y * hsin_y + np.cos(lat1) * np.cos(lat2) * hsin_x * hsin_x
    # rounding can push h just above 1 for antipodal points
    h = np.minimum(h, 1.0)
    return 2 * np.arctan2(np.sqrt(h), np.sqrt(1 - h))


def dist_law_of_cosines_rad(lat1: T, lon1: T, lat2: T, lon2: T) -> T:
    """
    Central angle by the spherical law of cosines.

    Loses precision for very small separations, where the cosine is
    close to 1.
    """
    cos_angle = np.sin(lat1) * np.sin(lat2) + np.cos(lat1) * np.cos(lat2) * np.cos(lon2 - lon1)
    return np.arccos(np.clip(cos_angle, -1.0, 1.0))


def dist_vincenty_rad(lat1: T, lon1: T, lat2: T, lon2: T) -> T:
    """Central angle by the Vincenty formula specialised to a sphere."""
    cos_lat1 = np.cos(lat1)
    cos_lat2 = np.cos(lat2)
    sin_lat1 = np.sin(lat1)
    sin_lat2 = np.sin(lat2)
    d_lon = lon2 - lon1
    cos_d_lon = np.cos(d_lon)
    sin_d_lon = np.sin(d_lon)

    a = cos_lat2 * sin_d_lon
    b = cos_lat1 * sin_lat2 - sin_lat1 * cos_lat2 * cos_d_lon
    c = sin_lat1 * sin_lat2 + cos_lat1 * cos_lat2 * cos_d_lon

    return np.arctan2(np.sqrt(a * a + b * b), c)


def point_on_bearing_rad(
    lat: float, lon: float, dist_rad: float, bearing_rad: float
) -> Tuple[float, float]:
    """
    Destination reached by travelling along a great circle.

    Args:
        lat, lon: Start point in radians
        dist_rad: Central angle to travel, in radians
        bearing_rad: Initial bearing in radians, clockwise from north

    Returns:
        (lat, lon) of the destination in radians
    """
    sin_lat = math.sin(lat)
    cos_lat = math.cos(lat)
    sin_dist = math.sin(dist_rad)
    cos_dist = math.cos(dist_rad)

    sin_lat2 = sin_lat * cos_dist + cos_lat * sin_dist * math.cos(bearing_rad)
    lat2 = math.asin(max(-1.0, min(1.0, sin_lat2)))
    lon2 = lon + math.atan2(
        math.sin(bearing_rad) * sin_dist * cos_lat,
        cos_dist - sin_lat * sin_lat2,
    )
    return lat2, lon2
