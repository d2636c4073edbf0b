"""
Oblique Stereographic projection (EPSG 9809, "double stereographic").

Geodetic latitudes are first mapped onto the Gauss conformal sphere, which
is then projected stereographically.
"""

import math

import numpy as np

from .. import config
from ..exceptions import ConfigurationError
from .base import HALF_PI, MapProjection, adjust_lon, isometric_latitude


class ObliqueStereographicProjection(MapProjection):
    """
    Oblique Stereographic on the conformal sphere.

    Parameters (degrees / metres): ``latitude_of_origin``,
    ``central_meridian``, ``scale_factor``, ``false_easting``,
    ``false_northing``. The antipode of the origin cannot be projected.
    """

    projection_name = "Oblique_Stereographic"

    def __init__(self, parameters, dimension=2):
        super().__init__(parameters, dimension)
        self.latitude_of_origin = self._angle("latitude_of_origin", default=0.0)
        self.central_meridian = self._angle("central_meridian", "longitude_of_origin",
                                            default=0.0)
        self.k0 = self._scale_factor()
        phi0 = self.latitude_of_origin
        if abs(phi0) >= HALF_PI - config.POLE_TOLERANCE:
            raise ConfigurationError(
                f"{self.projection_name}: latitude of origin must not be a pole"
            )
        es = self.es
        sin0 = math.sin(phi0)
        con = 1.0 - es * sin0 * sin0
        rho0 = self.semi_major * (1.0 - es) / (con * math.sqrt(con))
        nu0 = self.semi_major / math.sqrt(con)
        self.radius = math.sqrt(rho0 * nu0)
        self.n = math.sqrt(1.0 + es * math.cos(phi0) ** 4 / (1.0 - es))
        psi0 = float(isometric_latitude(phi0, self.e))
        sin_chi_plain = math.tanh(self.n * psi0)
        self.c = ((self.n + sin0) * (1.0 - sin_chi_plain)
                  / ((self.n - sin0) * (1.0 + sin_chi_plain)))
        self._half_log_c = 0.5 * math.log(self.c)
        self.chi0 = math.asin(math.tanh(self.n * psi0 + self._half_log_c))
        self._two_rk = 2.0 * self.radius * self.k0

    def _conformal_latitude(self, phi):
        return np.arcsin(np.tanh(self.n * isometric_latitude(phi, self.e) + self._half_log_c))

    def _project(self, lam, phi):
        chi = self._conformal_latitude(phi)
        dlam = self.n * adjust_lon(lam - self.central_meridian)
        sin_chi0, cos_chi0 = math.sin(self.chi0), math.cos(self.chi0)
        b = 1.0 + np.sin(chi) * sin_chi0 + np.cos(chi) * cos_chi0 * np.cos(dlam)
        self._raise_if(b <= 1e-12, "the antipode of the projection origin cannot be projected")
        x = self._two_rk * np.cos(chi) * np.sin(dlam) / b
        y = self._two_rk * (np.sin(chi) * cos_chi0 - np.cos(chi) * sin_chi0 * np.cos(dlam)) / b
        return x, y

    def _unproject(self, x, y):
        sin_chi0, cos_chi0 = math.sin(self.chi0), math.cos(self.chi0)
        rho = np.hypot(x, y)
        c = 2.0 * np.arctan(rho / self._two_rk)
        sin_c, cos_c = np.sin(c), np.cos(c)
        origin = rho == 0
        rho_safe = np.where(origin, 1.0, rho)
        sin_chi = np.where(origin, sin_chi0,
                           cos_c * sin_chi0 + y * sin_c * cos_chi0 / rho_safe)
        sin_chi = np.clip(sin_chi, -1.0, 1.0)
        dlam = np.arctan2(x * sin_c, rho * cos_chi0 * cos_c - y * sin_chi0 * sin_c)
        lam = adjust_lon(dlam / self.n + self.central_meridian)

        pole = np.abs(sin_chi) >= 1.0 - 1e-15
        sin_safe = np.where(pole, 0.0, sin_chi)
        psi = (np.arctanh(sin_safe) - self._half_log_c) / self.n
        phi = 2.0 * np.arctan(np.exp(psi)) - HALF_PI
        for _ in range(config.MAX_ITERATIONS):
            sin_phi = np.sin(phi)
            dphi = ((isometric_latitude(phi, self.e) - psi) * np.cos(phi)
                    * (1.0 - self.es * sin_phi * sin_phi) / (1.0 - self.es))
            phi = phi - dphi
            if not np.any(np.abs(dphi) >= config.ANGULAR_TOLERANCE):
                break
        else:
            self._raise_if(np.abs(dphi) >= config.ANGULAR_TOLERANCE,
                           f"inverse did not converge after {config.MAX_ITERATIONS} iterations")
        phi = np.where(pole, np.copysign(HALF_PI, sin_chi), phi)
        return lam, phi
