"""
Krovak oblique conformal conic projection (EPSG 9819).

The native Krovak axes point south and west. Like PROJ, this implementation
returns the negated values so that the output is easting/northing, and then
adds the false easting and northing.
"""

import math

import numpy as np

from .. import config
from ..exceptions import ConfigurationError
from .base import HALF_PI, QUARTER_PI, MapProjection


class KrovakProjection(MapProjection):
    """
    Krovak projection on the Bessel ellipsoid (or any other).

    Parameters default to the S-JTSK values: ``latitude_of_center`` 49.5,
    ``longitude_of_center`` 24.8333 (east of Greenwich), ``azimuth``
    30.2881397527778 (co-latitude of the cone axis),
    ``pseudo_standard_parallel_1`` 78.5 and ``scale_factor`` 0.9999.
    """

    projection_name = "Krovak"

    def __init__(self, parameters, dimension=2):
        super().__init__(parameters, dimension)
        self.latitude_of_center = self._angle("latitude_of_center", "latitude_of_origin",
                                              default=49.5)
        self.longitude_of_center = self._angle("longitude_of_center", "central_meridian",
                                               default=24.0 + 50.0 / 60.0)
        self.azimuth = self._angle("azimuth", default=30.2881397527778)
        self.pseudo_standard_parallel = self._angle("pseudo_standard_parallel_1",
                                                    default=78.5)
        self.k0 = self._scale_factor(default=0.9999)
        if not 0 < abs(self.pseudo_standard_parallel) < HALF_PI:
            raise ConfigurationError(
                f"{self.projection_name}: pseudo standard parallel must be within (0, 90)"
            )

        es, e = self.es, self.e
        phi_c = self.latitude_of_center
        sin_c = math.sin(phi_c)
        self.a_conformal = self.semi_major * math.sqrt(1.0 - es) / (1.0 - es * sin_c ** 2)
        self.b = math.sqrt(1.0 + es * math.cos(phi_c) ** 4 / (1.0 - es))
        gamma0 = math.asin(sin_c / self.b)
        self.t0 = (math.tan(QUARTER_PI + gamma0 / 2.0)
                   * ((1.0 + e * sin_c) / (1.0 - e * sin_c)) ** (e * self.b / 2.0)
                   / math.tan(QUARTER_PI + phi_c / 2.0) ** self.b)
        self.n = math.sin(self.pseudo_standard_parallel)
        self.r0 = self.k0 * self.a_conformal / math.tan(self.pseudo_standard_parallel)
        self._tan_parallel = math.tan(QUARTER_PI + self.pseudo_standard_parallel / 2.0)

    def _project(self, lam, phi):
        e, b = self.e, self.b
        con = e * np.sin(phi)
        u = 2.0 * (np.arctan(self.t0 * np.power(np.tan(phi / 2.0 + QUARTER_PI), b)
                             / np.power((1.0 + con) / (1.0 - con), e * b / 2.0))
                   - QUARTER_PI)
        v = b * (self.longitude_of_center - lam)
        cos_alpha, sin_alpha = math.cos(self.azimuth), math.sin(self.azimuth)
        t = np.arcsin(np.clip(cos_alpha * np.sin(u) + sin_alpha * np.cos(u) * np.cos(v),
                              -1.0, 1.0))
        self._raise_if(np.abs(t) >= HALF_PI - config.POLE_TOLERANCE,
                       "point lies on the axis of the Krovak cone")
        d = np.arcsin(np.clip(np.cos(u) * np.sin(v) / np.cos(t), -1.0, 1.0))
        theta = self.n * d
        r = self.r0 * self._tan_parallel ** self.n / np.power(np.tan(t / 2.0 + QUARTER_PI), self.n)
        southing = r * np.cos(theta)
        westing = r * np.sin(theta)
        return -westing, -southing

    def _unproject(self, x, y):
        southing, westing = -y, -x
        r = np.hypot(southing, westing)
        theta = np.arctan2(westing, southing)
        d = theta / self.n
        t = 2.0 * (np.arctan(np.power(self.r0 / r, 1.0 / self.n) * self._tan_parallel)
                   - QUARTER_PI)
        cos_alpha, sin_alpha = math.cos(self.azimuth), math.sin(self.azimuth)
        u = np.arcsin(np.clip(cos_alpha * np.sin(t) - sin_alpha * np.cos(t) * np.cos(d),
                              -1.0, 1.0))
        v = np.arcsin(np.clip(np.cos(t) * np.sin(d) / np.cos(u), -1.0, 1.0))
        lam = self.longitude_of_center - v / self.b

        e = self.e
        base = np.power(np.tan(u / 2.0 + QUARTER_PI) / self.t0, 1.0 / self.b)
        phi = u
        for _ in range(config.MAX_ITERATIONS):
            con = e * np.sin(phi)
            phi_next = 2.0 * (np.arctan(base * np.power((1.0 + con) / (1.0 - con), e / 2.0))
                              - QUARTER_PI)
            delta = np.abs(phi_next - phi)
            phi = phi_next
            if not np.any(delta >= config.ANGULAR_TOLERANCE):
                break
        else:
            self._raise_if(delta >= config.ANGULAR_TOLERANCE,
                           f"inverse did not converge after {config.MAX_ITERATIONS} iterations")
        return lam, phi
