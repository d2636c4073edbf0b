"""
Conversion between geographic and geocentric (earth-centred) coordinates.
"""

import numpy as np

from .. import config
from ..crs.models import Ellipsoid
from ..exceptions import ConfigurationError, NumericDomainError
from .base import ElementaryTransform


class GeographicGeocentricTransform(ElementaryTransform):
    """
    Geographic ``(lon, lat[, h])`` in radians/metres to geocentric ``(X, Y, Z)``.

    The forward conversion is closed form. The inverse iterates on latitude
    with ``phi = atan2(Z + e^2 N sin(phi), p)``, which is well behaved at the
    poles (``p == 0``) and converges by a factor of about ``e^2`` per step.

    Parameters
    ----------
    ellipsoid : Ellipsoid
        Reference ellipsoid
    dimension : int, optional
        Number of geographic ordinates (2 assumes a height of zero)
    """

    def __init__(self, ellipsoid: Ellipsoid, dimension: int = 3):
        if dimension not in (2, 3):
            raise ConfigurationError(f"Geographic dimension must be 2 or 3, got {dimension}")
        super().__init__(dimension, 3)
        self.ellipsoid = ellipsoid
        self.semi_major = ellipsoid.semi_major_axis
        self.es = ellipsoid.eccentricity_squared

    def _forward(self, points: np.ndarray) -> np.ndarray:
        lon, lat = points[:, 0], points[:, 1]
        h = points[:, 2] if points.shape[1] > 2 else 0.0
        sin_lat = np.sin(lat)
        cos_lat = np.cos(lat)
        nu = self.semi_major / np.sqrt(1.0 - self.es * sin_lat ** 2)
        x = (nu + h) * cos_lat * np.cos(lon)
        y = (nu + h) * cos_lat * np.sin(lon)
        z = (nu * (1.0 - self.es) + h) * sin_lat
        return np.column_stack((x, y, z))

    def _inverse(self, points: np.ndarray) -> np.ndarray:
        x, y, z = points[:, 0], points[:, 1], points[:, 2]
        a, es = self.semi_major, self.es
        p = np.hypot(x, y)
        lon = np.arctan2(y, x)
        lat = np.arctan2(z, p * (1.0 - es))
        for _ in range(config.MAX_ITERATIONS):
            sin_lat = np.sin(lat)
            nu = a / np.sqrt(1.0 - es * sin_lat ** 2)
            new_lat = np.arctan2(z + es * nu * sin_lat, p)
            delta = np.abs(new_lat - lat)
            lat = new_lat
            if not np.any(delta >= config.ANGULAR_TOLERANCE):
                break
        else:
            raise NumericDomainError(
                f"Geocentric to geographic conversion did not converge after "
                f"{config.MAX_ITERATIONS} iterations"
            )
        if self._source_dimension == 2:
            return np.column_stack((lon, lat))
        sin_lat = np.sin(lat)
        height = p * np.cos(lat) + z * sin_lat - a * np.sqrt(1.0 - es * sin_lat ** 2)
        return np.column_stack((lon, lat, height))

    def _describe(self) -> str:
        return f"{self.ellipsoid.name!r}, dimension={self._source_dimension}"
