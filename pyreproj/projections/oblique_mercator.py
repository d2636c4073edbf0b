"""
Hotine Oblique Mercator, variant A (EPSG 9812) and variant B (EPSG 9815).

Variant A measures false easting/northing from the natural origin, where
the initial line meets the aposphere equator; variant B measures them from
the projection centre.
"""

import math

import numpy as np

from .. import config
from ..exceptions import ConfigurationError
from .base import (HALF_PI, QUARTER_PI, MapProjection, adjust_lon,
                   conformal_to_geodetic, tsfn)


class HotineObliqueMercatorProjection(MapProjection):
    """
    Hotine Oblique Mercator, variant A.

    Parameters (degrees / metres): ``latitude_of_center``,
    ``longitude_of_center``, ``azimuth``, ``rectified_grid_angle``
    (defaults to ``azimuth``), ``scale_factor``, ``false_easting``,
    ``false_northing``.
    """

    projection_name = "Hotine_Oblique_Mercator"
    centre_origin = False

    def __init__(self, parameters, dimension=2):
        super().__init__(parameters, dimension)
        self.latitude_of_center = self._angle("latitude_of_center", "latitude_of_origin")
        self.longitude_of_center = self._angle("longitude_of_center", "central_meridian")
        self.azimuth = self._angle("azimuth")
        self.rectified_grid_angle = self._angle("rectified_grid_angle",
                                                default=math.degrees(self.azimuth))
        self.k0 = self._scale_factor()
        if abs(self.latitude_of_center) >= HALF_PI - config.POLE_TOLERANCE:
            raise ConfigurationError(
                f"{self.projection_name}: projection centre cannot be at a pole"
            )

        es, e = self.es, self.e
        phi_c, alpha_c = self.latitude_of_center, self.azimuth
        sin_c, cos_c = math.sin(phi_c), math.cos(phi_c)
        sign_c = math.copysign(1.0, phi_c) if phi_c != 0 else 0.0
        self.b = math.sqrt(1.0 + es * cos_c ** 4 / (1.0 - es))
        self.a_aposphere = (self.semi_major * self.b * self.k0 * math.sqrt(1.0 - es)
                            / (1.0 - es * sin_c ** 2))
        t0 = float(tsfn(phi_c, e))
        d = self.b * math.sqrt(1.0 - es) / (cos_c * math.sqrt(1.0 - es * sin_c ** 2))
        d2 = max(d * d, 1.0)
        f = d + math.sqrt(d2 - 1.0) * sign_c
        self.h = f * t0 ** self.b
        g = (f - 1.0 / f) / 2.0
        sin_gamma0 = math.sin(alpha_c) / d
        if abs(sin_gamma0) > 1.0:
            raise ConfigurationError(
                f"{self.projection_name}: azimuth is incompatible with the projection centre"
            )
        self.gamma0 = math.asin(sin_gamma0)
        self.lambda0 = self.longitude_of_center - math.asin(g * math.tan(self.gamma0)) / self.b
        if abs(abs(alpha_c) - HALF_PI) < 1e-12:
            self.u_centre = self.a_aposphere * (self.longitude_of_center - self.lambda0)
        else:
            self.u_centre = (self.a_aposphere / self.b
                             * math.atan(math.sqrt(d2 - 1.0) / math.cos(alpha_c)) * sign_c)
        self._u_offset = abs(self.u_centre) * sign_c if self.centre_origin else 0.0

    def _project(self, lam, phi):
        a_ap, b = self.a_aposphere, self.b
        cos_g0, sin_g0 = math.cos(self.gamma0), math.sin(self.gamma0)
        dlam = adjust_lon(lam - self.lambda0)
        pole = np.abs(phi) >= HALF_PI - config.POLE_TOLERANCE
        t = tsfn(np.where(pole, 0.0, phi), self.e)
        q = self.h / np.power(t, b)
        s = (q - 1.0 / q) / 2.0
        big_t = (q + 1.0 / q) / 2.0
        v = np.sin(b * dlam)
        u = (-v * cos_g0 + s * sin_g0) / big_t
        self._raise_if(~pole & (np.abs(u) >= 1.0),
                       "point lies 90 degrees from the initial line")
        v_coord = a_ap * np.log((1.0 - u) / (1.0 + u)) / (2.0 * b)
        u_coord = a_ap / b * np.arctan2(s * cos_g0 + v * sin_g0, np.cos(b * dlam))
        pole_v = a_ap / b * np.log(np.tan(QUARTER_PI - np.sign(phi) * self.gamma0 / 2.0))
        v_coord = np.where(pole, pole_v, v_coord)
        u_coord = np.where(pole, a_ap * phi / b, u_coord) - self._u_offset
        cos_gc, sin_gc = math.cos(self.rectified_grid_angle), math.sin(self.rectified_grid_angle)
        x = v_coord * cos_gc + u_coord * sin_gc
        y = u_coord * cos_gc - v_coord * sin_gc
        return x, y

    def _unproject(self, x, y):
        a_ap, b = self.a_aposphere, self.b
        cos_g0, sin_g0 = math.cos(self.gamma0), math.sin(self.gamma0)
        cos_gc, sin_gc = math.cos(self.rectified_grid_angle), math.sin(self.rectified_grid_angle)
        v_coord = x * cos_gc - y * sin_gc
        u_coord = y * cos_gc + x * sin_gc + self._u_offset
        q = np.exp(-b * v_coord / a_ap)
        s = (q - 1.0 / q) / 2.0
        big_t = (q + 1.0 / q) / 2.0
        v = np.sin(b * u_coord / a_ap)
        u = (v * cos_g0 + s * sin_g0) / big_t
        pole = np.abs(u) >= 1.0 - 1e-14
        u_safe = np.where(pole, 0.0, u)
        t = np.power(self.h / np.sqrt((1.0 + u_safe) / (1.0 - u_safe)), 1.0 / b)
        chi = HALF_PI - 2.0 * np.arctan(t)
        phi = conformal_to_geodetic(chi, self.es)
        lam = self.lambda0 - np.arctan2(s * cos_g0 - v * sin_g0, np.cos(b * u_coord / a_ap)) / b
        phi = np.where(pole, np.copysign(HALF_PI, u), phi)
        lam = np.where(pole, self.lambda0, lam)
        return adjust_lon(lam), phi


class ObliqueMercatorProjection(HotineObliqueMercatorProjection):
    """Hotine Oblique Mercator, variant B (false origin at the projection centre)."""

    projection_name = "Oblique_Mercator"
    centre_origin = True
