"""
Base class and shared geodesy helpers for map projections.

Projections take geographic coordinates ``(lon, lat)`` in radians and
produce ``(easting, northing)`` in metres. A third ordinate, if present,
passes through untouched. Angular projection parameters are given in
degrees and linear ones in metres, as in WKT.
"""

import math
from abc import abstractmethod
from typing import Tuple

import numpy as np

from .. import config
from ..crs.models import ParameterList, ParameterSource
from ..exceptions import ConfigurationError, NumericDomainError
from ..transforms.base import ElementaryTransform

HALF_PI = math.pi / 2.0
QUARTER_PI = math.pi / 4.0


def adjust_lon(lon: np.ndarray) -> np.ndarray:
    """Wrap longitudes outside ``[-pi, pi]`` back into that range."""
    lon = np.asarray(lon, dtype=float)
    wrapped = lon - 2.0 * math.pi * np.round(lon / (2.0 * math.pi))
    return np.where(np.abs(lon) > math.pi, wrapped, lon)


def tsfn(phi: np.ndarray, e: float) -> np.ndarray:
    """Snyder's ``t``: ``tan(pi/4 - phi/2) / ((1 - e sin phi) / (1 + e sin phi))^(e/2)``."""
    sin_phi = np.sin(phi)
    con = e * sin_phi
    return np.tan(QUARTER_PI - phi / 2.0) / np.power((1.0 - con) / (1.0 + con), e / 2.0)


def msfn(phi: np.ndarray, es: float) -> np.ndarray:
    """Snyder's ``m``: ``cos phi / sqrt(1 - e^2 sin^2 phi)``."""
    sin_phi = np.sin(phi)
    return np.cos(phi) / np.sqrt(1.0 - es * sin_phi * sin_phi)


def isometric_latitude(phi: np.ndarray, e: float) -> np.ndarray:
    """Isometric latitude ``asinh(tan phi) - e atanh(e sin phi)``."""
    return np.arcsinh(np.tan(phi)) - e * np.arctanh(e * np.sin(phi))


def meridian_arc_coefficients(es: float) -> Tuple[float, float, float, float]:
    e4 = es * es
    e6 = e4 * es
    return (
        1.0 - es / 4.0 - 3.0 * e4 / 64.0 - 5.0 * e6 / 256.0,
        3.0 * es / 8.0 + 3.0 * e4 / 32.0 + 45.0 * e6 / 1024.0,
        15.0 * e4 / 256.0 + 45.0 * e6 / 1024.0,
        35.0 * e6 / 3072.0,
    )


def meridian_arc(phi: np.ndarray, a: float, es: float) -> np.ndarray:
    """Distance along the meridian from the equator to latitude ``phi``."""
    c0, c1, c2, c3 = meridian_arc_coefficients(es)
    return a * (c0 * phi - c1 * np.sin(2.0 * phi) + c2 * np.sin(4.0 * phi)
                - c3 * np.sin(6.0 * phi))


def footpoint_latitude(arc: np.ndarray, a: float, es: float) -> np.ndarray:
    """Latitude whose meridian arc equals ``arc`` (rectifying latitude series)."""
    c0 = meridian_arc_coefficients(es)[0]
    mu = arc / (a * c0)
    root = math.sqrt(1.0 - es)
    e1 = (1.0 - root) / (1.0 + root)
    return (mu
            + (3.0 * e1 / 2.0 - 27.0 * e1 ** 3 / 32.0) * np.sin(2.0 * mu)
            + (21.0 * e1 ** 2 / 16.0 - 55.0 * e1 ** 4 / 32.0) * np.sin(4.0 * mu)
            + (151.0 * e1 ** 3 / 96.0) * np.sin(6.0 * mu)
            + (1097.0 * e1 ** 4 / 512.0) * np.sin(8.0 * mu))


def conformal_to_geodetic(chi: np.ndarray, es: float) -> np.ndarray:
    """Geodetic latitude from conformal latitude (series to e^8)."""
    e4 = es * es
    e6 = e4 * es
    e8 = e6 * es
    return (chi
            + (es / 2.0 + 5.0 * e4 / 24.0 + e6 / 12.0 + 13.0 * e8 / 360.0) * np.sin(2.0 * chi)
            + (7.0 * e4 / 48.0 + 29.0 * e6 / 240.0 + 811.0 * e8 / 11520.0) * np.sin(4.0 * chi)
            + (7.0 * e6 / 120.0 + 81.0 * e8 / 1120.0) * np.sin(6.0 * chi)
            + (4279.0 * e8 / 161280.0) * np.sin(8.0 * chi))


class MapProjection(ElementaryTransform):
    """
    Abstract base class for map projections.

    Subclasses implement ``_project`` and ``_unproject``, which work relative
    to the false origin; false easting and northing are applied here.

    Parameters
    ----------
    parameters : mapping or iterable of ProjectionParameter
        Projection parameters; ``semi_major`` and ``semi_minor`` are required
    dimension : int, optional
        2, or 3 to carry a height ordinate through unchanged
    """

    projection_name = "Map_Projection"

    def __init__(self, parameters: ParameterSource, dimension: int = 2):
        if dimension not in (2, 3):
            raise ConfigurationError(f"Projection dimension must be 2 or 3, got {dimension}")
        super().__init__(dimension, dimension)
        self.parameters = ParameterList(parameters)
        self.semi_major = self.parameters.get("semi_major")
        self.semi_minor = self.parameters.get("semi_minor")
        if not math.isfinite(self.semi_major) or self.semi_major <= 0:
            raise ConfigurationError(
                f"{self.projection_name}: semi_major must be positive, got {self.semi_major}"
            )
        if not 0 < self.semi_minor <= self.semi_major:
            raise ConfigurationError(
                f"{self.projection_name}: semi_minor must be in (0, semi_major], "
                f"got {self.semi_minor}; the eccentricity must be smaller than 1"
            )
        self.es = 1.0 - (self.semi_minor / self.semi_major) ** 2
        self.e = math.sqrt(self.es)
        self.false_easting = self.parameters.get("false_easting", default=0.0)
        self.false_northing = self.parameters.get("false_northing", default=0.0)

    def _angle(self, *names: str, **kwargs) -> float:
        """Look up an angular parameter (degrees) and return it in radians."""
        return math.radians(self.parameters.get(*names, **kwargs))

    def _scale_factor(self, *names: str, default: float = 1.0) -> float:
        names = names or ("scale_factor",)
        k0 = self.parameters.get(*names, default=default)
        if not k0 > 0:
            raise ConfigurationError(
                f"{self.projection_name}: scale factor must be positive, got {k0}"
            )
        return k0

    def _raise_if(self, mask: np.ndarray, message: str) -> None:
        """Raise NumericDomainError if any coordinate is flagged in ``mask``."""
        if np.any(mask):
            indices = np.flatnonzero(mask)
            raise NumericDomainError(
                f"{self.projection_name}: {message} "
                f"({indices.size} coordinate(s), first at index {indices[0]})"
            )

    @abstractmethod
    def _project(self, lam: np.ndarray, phi: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        raise NotImplementedError

    @abstractmethod
    def _unproject(self, x: np.ndarray, y: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        raise NotImplementedError

    def _refine_inverse(self, x: np.ndarray, y: np.ndarray,
                        lam: np.ndarray, phi: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Correct an approximate series inverse against the forward formulas.

        Each step adds the difference between the series inverse of the
        target point and the series inverse of the current forward image,
        until the forward image is within ``config.LINEAR_TOLERANCE``.
        """
        target_lam, target_phi = lam, phi
        for _ in range(config.MAX_ITERATIONS):
            fx, fy = self._project(lam, phi)
            error = np.maximum(np.abs(fx - x), np.abs(fy - y))
            if not np.any(error >= config.LINEAR_TOLERANCE):
                return lam, phi
            image_lam, image_phi = self._series_unproject(fx, fy)
            lam = lam + (target_lam - image_lam)
            phi = phi + (target_phi - image_phi)
        self._raise_if(error >= config.LINEAR_TOLERANCE,
                       f"inverse did not converge after {config.MAX_ITERATIONS} iterations")
        return lam, phi

    def _series_unproject(self, x: np.ndarray, y: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        raise NotImplementedError

    @staticmethod
    def _stack(points: np.ndarray, first: np.ndarray, second: np.ndarray) -> np.ndarray:
        if points.shape[1] > 2:
            return np.column_stack((first, second, points[:, 2:]))
        return np.column_stack((first, second))

    def _forward(self, points: np.ndarray) -> np.ndarray:
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            x, y = self._project(points[:, 0], points[:, 1])
        return self._stack(points, x + self.false_easting, y + self.false_northing)

    def _inverse(self, points: np.ndarray) -> np.ndarray:
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            lam, phi = self._unproject(points[:, 0] - self.false_easting,
                                       points[:, 1] - self.false_northing)
        return self._stack(points, lam, phi)

    def _describe(self) -> str:
        return ", ".join(f"{name}={value:g}" for name, value in self.parameters.items())
