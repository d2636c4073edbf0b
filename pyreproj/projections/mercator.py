"""
Mercator (1SP and 2SP, EPSG 9804/9805) and Popular Visualisation
Pseudo-Mercator (EPSG 1024).
"""

import math

import numpy as np

from .. import config
from ..exceptions import ConfigurationError
from .base import (HALF_PI, QUARTER_PI, MapProjection, adjust_lon,
                   conformal_to_geodetic, tsfn)


class Mercator(MapProjection):
    """
    Ellipsoidal Mercator.

    When ``standard_parallel_1`` is given (2SP variant) the scale factor on
    the equator is derived from it; otherwise ``scale_factor`` is used.
    Latitudes of +/-90 degrees cannot be projected.
    """

    projection_name = "Mercator_1SP"

    def __init__(self, parameters, dimension=2):
        super().__init__(parameters, dimension)
        self.central_meridian = self._angle("central_meridian", "longitude_of_origin",
                                            default=0.0)
        if "standard_parallel_1" in self.parameters:
            phi1 = self._angle("standard_parallel_1")
            if abs(phi1) >= HALF_PI:
                raise ConfigurationError(
                    f"{self.projection_name}: standard parallel must be within (-90, 90)"
                )
            self.projection_name = "Mercator_2SP"
            self.k0 = math.cos(phi1) / math.sqrt(1.0 - self.es * math.sin(phi1) ** 2)
        else:
            self.k0 = self._scale_factor()
        self._ak0 = self.semi_major * self.k0

    def _project(self, lam, phi):
        self._raise_if(np.abs(phi) >= HALF_PI - config.POLE_TOLERANCE,
                       "latitude of +/-90 degrees is undefined in the Mercator projection")
        x = self._ak0 * adjust_lon(lam - self.central_meridian)
        y = -self._ak0 * np.log(tsfn(phi, self.e))
        return x, y

    def _unproject(self, x, y):
        chi = HALF_PI - 2.0 * np.arctan(np.exp(-y / self._ak0))
        phi = conformal_to_geodetic(chi, self.es)
        lam = adjust_lon(x / self._ak0 + self.central_meridian)
        return lam, phi


class PseudoMercator(MapProjection):
    """
    Spherical Mercator formulas applied to ellipsoidal coordinates, using the
    semi-major axis as the sphere radius (the "web mercator").
    """

    projection_name = "Popular_Visualisation Pseudo-Mercator"

    def __init__(self, parameters, dimension=2):
        super().__init__(parameters, dimension)
        self.central_meridian = self._angle("central_meridian", "longitude_of_origin",
                                            default=0.0)
        self.k0 = self._scale_factor()
        self._ak0 = self.semi_major * self.k0

    def _project(self, lam, phi):
        self._raise_if(np.abs(phi) >= HALF_PI - config.POLE_TOLERANCE,
                       "latitude of +/-90 degrees is undefined in the Mercator projection")
        x = self._ak0 * adjust_lon(lam - self.central_meridian)
        y = self._ak0 * np.log(np.tan(QUARTER_PI + phi / 2.0))
        return x, y

    def _unproject(self, x, y):
        phi = HALF_PI - 2.0 * np.arctan(np.exp(-y / self._ak0))
        lam = adjust_lon(x / self._ak0 + self.central_meridian)
        return lam, phi
