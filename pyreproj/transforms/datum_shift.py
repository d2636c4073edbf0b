"""
Seven-parameter (Bursa-Wolf) datum shift on geocentric coordinates.
"""

import math

import numpy as np

from ..crs.models import BursaWolfParameters
from .base import ElementaryTransform

ARC_SECONDS_TO_RADIANS = math.pi / (180.0 * 3600.0)


class BursaWolfTransform(ElementaryTransform):
    """
    Position-vector similarity transform between two geocentric frames.

    The forward direction maps the datum's frame onto WGS 84::

        X' = T + (1 + s) R X,   R = [[1, -rz, ry], [rz, 1, -rx], [-ry, rx, 1]]

    The inverse applies the same formula with every parameter negated. This is
    the usual small-angle approximation, not the exact matrix inverse; the
    round-trip error is at the centimetre level for typical parameters and
    grows with the rotations and the scale correction.
    """

    def __init__(self, parameters: BursaWolfParameters):
        super().__init__(3, 3)
        self.parameters = parameters
        self._forward_matrix, self._forward_translation = self._build(parameters, 1.0)
        self._inverse_matrix, self._inverse_translation = self._build(parameters, -1.0)

    @staticmethod
    def _build(parameters: BursaWolfParameters, sign: float):
        rx = sign * parameters.ex * ARC_SECONDS_TO_RADIANS
        ry = sign * parameters.ey * ARC_SECONDS_TO_RADIANS
        rz = sign * parameters.ez * ARC_SECONDS_TO_RADIANS
        scale = 1.0 + sign * parameters.ppm * 1e-6
        rotation = np.array([
            [1.0, -rz, ry],
            [rz, 1.0, -rx],
            [-ry, rx, 1.0],
        ])
        translation = sign * np.array([parameters.dx, parameters.dy, parameters.dz])
        return scale * rotation, translation

    def _forward(self, points: np.ndarray) -> np.ndarray:
        return points @ self._forward_matrix.T + self._forward_translation

    def _inverse(self, points: np.ndarray) -> np.ndarray:
        return points @ self._inverse_matrix.T + self._inverse_translation

    def _describe(self) -> str:
        return ", ".join(f"{value:g}" for value in self.parameters.as_list())
