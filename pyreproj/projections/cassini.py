"""
Cassini-Soldner projection (EPSG 9806).
"""

import numpy as np

from .base import (MapProjection, adjust_lon, footpoint_latitude,
                   meridian_arc)


class CassiniSoldnerProjection(MapProjection):
    """
    Ellipsoidal Cassini-Soldner.

    The forward and inverse are the usual truncated series; the inverse
    series result is then refined against the forward so that round trips
    agree to well below a millimetre.
    """

    projection_name = "Cassini_Soldner"

    def __init__(self, parameters, dimension=2):
        super().__init__(parameters, dimension)
        self.latitude_of_origin = self._angle("latitude_of_origin", default=0.0)
        self.central_meridian = self._angle("central_meridian", "longitude_of_origin",
                                            default=0.0)
        self._origin_arc = float(meridian_arc(self.latitude_of_origin, self.semi_major, self.es))
        self._second_es = self.es / (1.0 - self.es)

    def _project(self, lam, phi):
        a, es = self.semi_major, self.es
        sin_phi, cos_phi, tan_phi = np.sin(phi), np.cos(phi), np.tan(phi)
        big_a = adjust_lon(lam - self.central_meridian) * cos_phi
        big_t = tan_phi * tan_phi
        big_c = self._second_es * cos_phi * cos_phi
        nu = a / np.sqrt(1.0 - es * sin_phi * sin_phi)
        a2 = big_a * big_a
        x = nu * (big_a - big_t * a2 * big_a / 6.0
                  - (8.0 - big_t + 8.0 * big_c) * big_t * a2 * a2 * big_a / 120.0)
        y = (meridian_arc(phi, a, es) - self._origin_arc
             + nu * tan_phi * (a2 / 2.0 + (5.0 - big_t + 6.0 * big_c) * a2 * a2 / 24.0))
        return x, y

    def _series_unproject(self, x, y):
        a, es = self.semi_major, self.es
        phi1 = footpoint_latitude(self._origin_arc + y, a, es)
        sin1, cos1, tan1 = np.sin(phi1), np.cos(phi1), np.tan(phi1)
        t1 = tan1 * tan1
        con = 1.0 - es * sin1 * sin1
        nu1 = a / np.sqrt(con)
        rho1 = a * (1.0 - es) / (con * np.sqrt(con))
        d = x / nu1
        d2 = d * d
        phi = phi1 - (nu1 * tan1 / rho1) * (d2 / 2.0 - (1.0 + 3.0 * t1) * d2 * d2 / 24.0)
        lam = self.central_meridian + (d - t1 * d2 * d / 3.0
                                       + (1.0 + 3.0 * t1) * t1 * d2 * d2 * d / 15.0) / cos1
        return adjust_lon(lam), phi

    def _unproject(self, x, y):
        lam, phi = self._series_unproject(x, y)
        return self._refine_inverse(x, y, lam, phi)
