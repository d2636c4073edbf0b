"""
Albers Equal Area conic projection (EPSG 9822).
"""

import math

import numpy as np

from .. import config
from ..exceptions import ConfigurationError
from .base import HALF_PI, MapProjection, adjust_lon, msfn


class AlbersEqualArea(MapProjection):
    """
    Ellipsoidal Albers Equal Area conic with two standard parallels.

    Parameters (degrees / metres): ``latitude_of_center`` (alias
    ``latitude_of_origin``), ``longitude_of_center`` (alias
    ``central_meridian``), ``standard_parallel_1``, ``standard_parallel_2``,
    ``false_easting``, ``false_northing``.
    """

    projection_name = "Albers_Conic_Equal_Area"

    def __init__(self, parameters, dimension=2):
        super().__init__(parameters, dimension)
        self.latitude_of_center = self._angle("latitude_of_center", "latitude_of_origin",
                                              default=0.0)
        self.longitude_of_center = self._angle("longitude_of_center", "central_meridian",
                                               default=0.0)
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
        q0 = self._qsfn(self.latitude_of_center)
        q1, q2 = self._qsfn(phi1), self._qsfn(phi2)
        if abs(phi1 - phi2) > 1e-10:
            self.n = (m1 * m1 - m2 * m2) / (q2 - q1)
        else:
            self.n = math.sin(phi1)
        self.c = m1 * m1 + self.n * q1
        self.rho0 = self.semi_major * math.sqrt(max(self.c - self.n * q0, 0.0)) / self.n
        self._q_pole = self._qsfn(HALF_PI)

    def _qsfn(self, phi):
        sin_phi = np.sin(phi)
        if self.e < 1e-10:
            return 2.0 * sin_phi
        con = self.e * sin_phi
        return (1.0 - self.es) * (sin_phi / (1.0 - con * con)
                                  - (1.0 / (2.0 * self.e))
                                  * np.log((1.0 - con) / (1.0 + con)))

    def _phi_from_q(self, q):
        if self.e < 1e-10:
            return np.arcsin(np.clip(q / 2.0, -1.0, 1.0))
        pole = np.abs(q) >= abs(self._q_pole) - 1e-12
        q_safe = np.where(pole, 0.0, q)
        phi = np.arcsin(np.clip(q_safe / 2.0, -1.0, 1.0))
        for _ in range(config.MAX_ITERATIONS):
            sin_phi = np.sin(phi)
            con = self.e * sin_phi
            com = 1.0 - con * con
            dphi = (com * com / (2.0 * np.cos(phi))
                    * (q_safe / (1.0 - self.es) - sin_phi / com
                       + np.log((1.0 - con) / (1.0 + con)) / (2.0 * self.e)))
            phi = phi + dphi
            if not np.any(np.abs(dphi) >= config.ANGULAR_TOLERANCE):
                break
        else:
            self._raise_if(np.abs(dphi) >= config.ANGULAR_TOLERANCE,
                           f"inverse did not converge after {config.MAX_ITERATIONS} iterations")
        return np.where(pole, np.copysign(HALF_PI, q), phi)

    def _project(self, lam, phi):
        q = self._qsfn(phi)
        rho = self.semi_major * np.sqrt(np.maximum(self.c - self.n * q, 0.0)) / self.n
        theta = self.n * adjust_lon(lam - self.longitude_of_center)
        x = rho * np.sin(theta)
        y = self.rho0 - rho * np.cos(theta)
        return x, y

    def _unproject(self, x, y):
        dy = self.rho0 - y
        if self.n < 0:
            rho = -np.hypot(x, dy)
            theta = np.arctan2(-x, -dy)
        else:
            rho = np.hypot(x, dy)
            theta = np.arctan2(x, dy)
        q = (self.c - (rho * self.n / self.semi_major) ** 2) / self.n
        phi = self._phi_from_q(q)
        lam = adjust_lon(theta / self.n + self.longitude_of_center)
        return lam, phi
