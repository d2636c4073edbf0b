"""
Lambert Conformal Conic with two standard parallels (EPSG 9802).
"""

import math

import numpy as np

from .. import config
from ..exceptions import ConfigurationError
from .base import HALF_PI, MapProjection, adjust_lon, msfn, tsfn


class LambertConformalConic2SP(MapProjection):
    """
    Ellipsoidal Lambert Conformal Conic.

    Parameters (degrees / metres): ``latitude_of_origin``,
    ``central_meridian``, ``standard_parallel_1``, ``standard_parallel_2``,
    ``false_easting``, ``false_northing``. The pole opposite the apex of the
    cone cannot be projected.
    """

    projection_name = "Lambert_Conformal_Conic_2SP"

    def __init__(self, parameters, dimension=2):
        super().__init__(parameters, dimension)
        self.latitude_of_origin = self._angle("latitude_of_origin", "latitude_of_center",
                                              default=0.0)
        self.central_meridian = self._angle("central_meridian", "longitude_of_origin",
                                            "longitude_of_center", default=0.0)
        phi1 = self._angle("standard_parallel_1")
        phi2 = self._angle("standard_parallel_2")
        if abs(phi1 + phi2) < 1e-10:
            raise ConfigurationError(
                f"{self.projection_name}: standard parallels must not be symmetric "
                f"about the equator"
            )
        if max(abs(phi1), abs(phi2)) >= HALF_PI:
            raise ConfigurationError(
                f"{self.projection_name}: standard parallels must be within (-90, 90)"
            )
        m1, m2 = msfn(phi1, self.es), msfn(phi2, self.es)
        t1, t2 = tsfn(phi1, self.e), tsfn(phi2, self.e)
        if abs(phi1 - phi2) > 1e-10:
            self.n = (math.log(m1) - math.log(m2)) / (math.log(t1) - math.log(t2))
        else:
            self.n = math.sin(phi1)
        self.f = m1 / (self.n * t1 ** self.n)
        t_origin = tsfn(self.latitude_of_origin, self.e)
        self.r_origin = self.semi_major * self.f * t_origin ** self.n

    def _project(self, lam, phi):
        if self.n > 0:
            opposite_pole = phi <= -HALF_PI + config.POLE_TOLERANCE
        else:
            opposite_pole = phi >= HALF_PI - config.POLE_TOLERANCE
        self._raise_if(opposite_pole, "the pole opposite the cone apex cannot be projected")
        t = np.maximum(tsfn(phi, self.e), 0.0)
        r = self.semi_major * self.f * np.power(t, self.n)
        theta = self.n * adjust_lon(lam - self.central_meridian)
        x = r * np.sin(theta)
        y = self.r_origin - r * np.cos(theta)
        return x, y

    def _unproject(self, x, y):
        dy = self.r_origin - y
        if self.n > 0:
            r = np.hypot(x, dy)
            theta = np.arctan2(x, dy)
        else:
            r = -np.hypot(x, dy)
            theta = np.arctan2(-x, -dy)
        t = np.power(r / (self.semi_major * self.f), 1.0 / self.n)
        phi = HALF_PI - 2.0 * np.arctan(t)
        half_e = self.e / 2.0
        for _ in range(config.MAX_ITERATIONS):
            con = self.e * np.sin(phi)
            phi_next = HALF_PI - 2.0 * np.arctan(t * np.power((1.0 - con) / (1.0 + con), half_e))
            delta = np.abs(phi_next - phi)
            phi = phi_next
            if not np.any(delta >= config.ANGULAR_TOLERANCE):
                break
        else:
            self._raise_if(delta >= config.ANGULAR_TOLERANCE,
                           f"inverse did not converge after {config.MAX_ITERATIONS} iterations")
        lam = adjust_lon(theta / self.n + self.central_meridian)
        return lam, phi
