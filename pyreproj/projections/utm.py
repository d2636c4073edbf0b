"""
Universal Transverse Mercator helpers.
"""

from typing import Union

import numpy as np

ArrayLike = Union[float, np.ndarray]

SOUTHERN_FALSE_NORTHING = 10000000.0


def utm_zone(longitude: ArrayLike) -> Union[int, np.ndarray]:
    """
    UTM zone number (1-60) for a longitude in degrees.

    Longitudes are wrapped into ``[-180, 180)`` first, so 180 falls in zone 1.

    Parameters
    ----------
    longitude : float or array-like
        Longitude(s) in degrees

    Returns
    -------
    int or numpy.ndarray
        Zone number(s); an ``int`` for scalar input
    """
    lon = np.asarray(longitude, dtype=float)
    wrapped = np.mod(lon + 180.0, 360.0) - 180.0
    zone = np.clip(np.floor((wrapped + 180.0) / 6.0).astype(int) + 1, 1, 60)
    if zone.ndim == 0:
        return int(zone)
    return zone


def is_northern_hemisphere(latitude: ArrayLike) -> Union[bool, np.ndarray]:
    north = np.asarray(latitude, dtype=float) >= 0
    if north.ndim == 0:
        return bool(north)
    return north


def utm_false_northing(latitude: ArrayLike) -> Union[float, np.ndarray]:
    """False northing of the UTM zone: 0 north of the equator, 10 000 km south."""
    northing = np.where(is_northern_hemisphere(latitude), 0.0, SOUTHERN_FALSE_NORTHING)
    if northing.ndim == 0:
        return float(northing)
    return northing
