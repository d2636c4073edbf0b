"""
Transverse Mercator (EPSG 9807).

Uses the Krüger series in the third flattening ``n`` (the JHS formulation
published by EPSG), which keeps millimetre accuracy several degrees away
from the central meridian. The inverse is closed form except for the
recovery of latitude from isometric latitude, which is iterated.
"""

import math

import numpy as np

from .. import config
from .base import HALF_PI, MapProjection, adjust_lon


class TransverseMercator(MapProjection):
    """
    Ellipsoidal Transverse Mercator.

    Parameters (degrees / metres): ``latitude_of_origin``,
    ``central_meridian``, ``scale_factor``, ``false_easting``,
    ``false_northing``.
    """

    projection_name = "Transverse_Mercator"

    def __init__(self, parameters, dimension=2):
        super().__init__(parameters, dimension)
        self.latitude_of_origin = self._angle("latitude_of_origin", default=0.0)
        self.central_meridian = self._angle("central_meridian", "longitude_of_origin",
                                            default=0.0)
        self.k0 = self._scale_factor()

        a, b = self.semi_major, self.semi_minor
        n = (a - b) / (a + b)
        n2, n3, n4 = n * n, n ** 3, n ** 4
        self.rectifying_radius = a / (1.0 + n) * (1.0 + n2 / 4.0 + n4 / 64.0)
        self._forward_coefficients = (
            n / 2.0 - 2.0 * n2 / 3.0 + 5.0 * n3 / 16.0 + 41.0 * n4 / 180.0,
            13.0 * n2 / 48.0 - 3.0 * n3 / 5.0 + 557.0 * n4 / 1440.0,
            61.0 * n3 / 240.0 - 103.0 * n4 / 140.0,
            49561.0 * n4 / 161280.0,
        )
        self._inverse_coefficients = (
            n / 2.0 - 2.0 * n2 / 3.0 + 37.0 * n3 / 96.0 - n4 / 360.0,
            n2 / 48.0 + n3 / 15.0 - 437.0 * n4 / 1440.0,
            17.0 * n3 / 480.0 - 37.0 * n4 / 840.0,
            4397.0 * n4 / 161280.0,
        )
        self._origin_arc = self._meridional_distance(self.latitude_of_origin)

    def _conformal_latitude(self, phi):
        q = np.arcsinh(np.tan(phi)) - self.e * np.arctanh(self.e * np.sin(phi))
        return np.arctan(np.sinh(q))

    def _meridional_distance(self, phi: float) -> float:
        xi0 = float(self._conformal_latitude(np.float64(phi)))
        xi = xi0 + sum(h * math.sin(2.0 * k * xi0)
                       for k, h in enumerate(self._forward_coefficients, start=1))
        return self.rectifying_radius * xi

    def _project(self, lam, phi):
        beta = self._conformal_latitude(phi)
        dlam = adjust_lon(lam - self.central_meridian)
        arg = np.cos(beta) * np.sin(dlam)
        self._raise_if(np.abs(arg) >= 1.0,
                       "point lies 90 degrees from the central meridian on the equator")
        eta0 = np.arctanh(arg)
        xi0 = np.arcsin(np.clip(np.sin(beta) * np.cosh(eta0), -1.0, 1.0))
        xi, eta = xi0.copy(), eta0.copy()
        for k, h in enumerate(self._forward_coefficients, start=1):
            xi = xi + h * np.sin(2.0 * k * xi0) * np.cosh(2.0 * k * eta0)
            eta = eta + h * np.cos(2.0 * k * xi0) * np.sinh(2.0 * k * eta0)
        x = self.k0 * self.rectifying_radius * eta
        y = self.k0 * (self.rectifying_radius * xi - self._origin_arc)
        return x, y

    def _unproject(self, x, y):
        scale = self.rectifying_radius * self.k0
        eta1 = x / scale
        xi1 = (y + self.k0 * self._origin_arc) / scale
        xi0, eta0 = xi1.copy(), eta1.copy()
        for k, h in enumerate(self._inverse_coefficients, start=1):
            xi0 = xi0 - h * np.sin(2.0 * k * xi1) * np.cosh(2.0 * k * eta1)
            eta0 = eta0 - h * np.cos(2.0 * k * xi1) * np.sinh(2.0 * k * eta1)
        beta = np.arcsin(np.clip(np.sin(xi0) / np.cosh(eta0), -1.0, 1.0))
        q_conformal = np.arcsinh(np.tan(beta))
        q = q_conformal.copy()
        for _ in range(config.MAX_ITERATIONS):
            q_next = q_conformal + self.e * np.arctanh(self.e * np.tanh(q))
            delta = np.abs(q_next - q)
            q = q_next
            if not np.any(delta >= config.ANGULAR_TOLERANCE):
                break
        else:
            self._raise_if(delta >= config.ANGULAR_TOLERANCE,
                           f"inverse did not converge after {config.MAX_ITERATIONS} iterations")
        phi = np.arctan(np.sinh(q))
        pole = np.abs(beta) >= HALF_PI - config.POLE_TOLERANCE
        lam = np.where(pole, self.central_meridian,
                       self.central_meridian + np.arctan2(np.sinh(eta0), np.cos(xi0)))
        return adjust_lon(lam), phi
