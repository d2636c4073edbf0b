"""
American Polyconic projection (EPSG 9818).
"""

import numpy as np

from .. import config
from .base import (MapProjection, adjust_lon, meridian_arc,
                   meridian_arc_coefficients)

_EQUATOR_TOLERANCE = 1e-10


class PolyconicProjection(MapProjection):
    """
    Ellipsoidal American Polyconic.

    The inverse solves for latitude with Newton-Raphson (Snyder 18-25).
    """

    projection_name = "Polyconic"

    def __init__(self, parameters, dimension=2):
        super().__init__(parameters, dimension)
        self.latitude_of_origin = self._angle("latitude_of_origin", default=0.0)
        self.central_meridian = self._angle("central_meridian", "longitude_of_origin",
                                            default=0.0)
        self._origin_arc = float(meridian_arc(self.latitude_of_origin, self.semi_major, self.es))

    def _arc_derivative(self, phi):
        """Derivative of the meridian arc divided by the semi-major axis."""
        c0, c1, c2, c3 = meridian_arc_coefficients(self.es)
        return (c0 - 2.0 * c1 * np.cos(2.0 * phi) + 4.0 * c2 * np.cos(4.0 * phi)
                - 6.0 * c3 * np.cos(6.0 * phi))

    def _project(self, lam, phi):
        a = self.semi_major
        dlam = adjust_lon(lam - self.central_meridian)
        equator = np.abs(phi) < _EQUATOR_TOLERANCE
        phi_safe = np.where(equator, 1.0, phi)
        sin_phi = np.sin(phi_safe)
        nu = a / np.sqrt(1.0 - self.es * sin_phi * sin_phi)
        cot = 1.0 / np.tan(phi_safe)
        big_l = dlam * sin_phi
        arc = meridian_arc(phi, a, self.es)
        x = np.where(equator, a * dlam, nu * cot * np.sin(big_l))
        y = np.where(equator, -self._origin_arc,
                     arc - self._origin_arc + nu * cot * (1.0 - np.cos(big_l)))
        return x, y

    def _unproject(self, x, y):
        a, es = self.semi_major, self.es
        big_a = (self._origin_arc + y) / a
        big_b = big_a * big_a + (x / a) ** 2
        equator = np.abs(big_a) < _EQUATOR_TOLERANCE
        phi = np.where(equator, 0.5, big_a)
        for _ in range(config.MAX_ITERATIONS):
            sin_phi = np.sin(phi)
            sin_2phi = np.sin(2.0 * phi)
            c = np.sqrt(1.0 - es * sin_phi * sin_phi) * np.tan(phi)
            mn = meridian_arc(phi, a, es) / a
            mn_prime = self._arc_derivative(phi)
            numerator = big_a * (c * mn + 1.0) - mn - 0.5 * (mn * mn + big_b) * c
            denominator = (es * sin_2phi * (mn * mn + big_b - 2.0 * big_a * mn) / (4.0 * c)
                           + (big_a - mn) * (c * mn_prime - 2.0 / sin_2phi) - mn_prime)
            dphi = np.where(equator, 0.0, numerator / denominator)
            phi = phi - dphi
            if not np.any(np.abs(dphi) >= config.ANGULAR_TOLERANCE):
                break
        else:
            self._raise_if(np.abs(dphi) >= config.ANGULAR_TOLERANCE,
                           f"inverse did not converge after {config.MAX_ITERATIONS} iterations")
        c = np.sqrt(1.0 - es * np.sin(phi) ** 2) * np.tan(phi)
        lam = np.arcsin(np.clip(x * c / a, -1.0, 1.0)) / np.sin(phi) + self.central_meridian
        phi = np.where(equator, 0.0, phi)
        lam = np.where(equator, x / a + self.central_meridian, lam)
        return adjust_lon(lam), phi
