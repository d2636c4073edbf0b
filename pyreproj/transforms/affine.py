"""
Affine transforms used at coordinate system boundaries.

Axis swaps, axis flips, unit scaling and prime meridian offsets are all
expressed as an augmented ``(d + 1) x (d + 1)`` matrix.
"""

from typing import Sequence

import numpy as np

from ..exceptions import ConfigurationError
from .base import ElementaryTransform


class AffineTransform(ElementaryTransform):
    """
    Affine transform in homogeneous coordinates.

    Parameters
    ----------
    matrix : array-like
        Square augmented matrix of size ``dimension + 1``; the last row must
        be ``(0, ..., 0, 1)``
    """

    def __init__(self, matrix: Sequence[Sequence[float]]):
        matrix = np.array(matrix, dtype=float)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1] or matrix.shape[0] < 2:
            raise ConfigurationError(f"Affine matrix must be square, got shape {matrix.shape}")
        dimension = matrix.shape[0] - 1
        expected_last_row = np.zeros(dimension + 1)
        expected_last_row[-1] = 1.0
        if not np.array_equal(matrix[-1], expected_last_row):
            raise ConfigurationError("Last row of an affine matrix must be (0, ..., 0, 1)")
        try:
            inverse_matrix = np.linalg.inv(matrix)
        except np.linalg.LinAlgError as exc:
            raise ConfigurationError("Affine matrix is singular and cannot be inverted") from exc
        super().__init__(dimension, dimension)
        self.matrix = matrix
        self.inverse_matrix = inverse_matrix

    @classmethod
    def from_scale_and_offset(cls, scales: Sequence[float],
                              offsets: Sequence[float] = None) -> "AffineTransform":
        """Diagonal transform ``x_i' = scales[i] * x_i + offsets[i]``."""
        dimension = len(scales)
        matrix = np.eye(dimension + 1)
        matrix[:dimension, :dimension] = np.diag(scales)
        if offsets is not None:
            matrix[:dimension, dimension] = offsets
        return cls(matrix)

    @property
    def is_identity(self) -> bool:
        return bool(np.array_equal(self.matrix, np.eye(self.matrix.shape[0])))

    @staticmethod
    def _apply(matrix: np.ndarray, points: np.ndarray) -> np.ndarray:
        dimension = matrix.shape[0] - 1
        return points @ matrix[:dimension, :dimension].T + matrix[:dimension, dimension]

    def _forward(self, points: np.ndarray) -> np.ndarray:
        return self._apply(self.matrix, points)

    def _inverse(self, points: np.ndarray) -> np.ndarray:
        return self._apply(self.inverse_matrix, points)

    def _describe(self) -> str:
        return np.array2string(self.matrix, precision=6, separator=", ").replace("\n", "")
