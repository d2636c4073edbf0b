"""
Math transform contract.

All transforms follow a common interface: they map coordinates of
``source_dimension`` ordinates to coordinates of ``target_dimension``
ordinates, and expose their inverse as another transform. Concrete transforms
work on ``(n, d)`` float arrays so that batches are processed with numpy.
"""

import copy
from abc import ABC, abstractmethod
from typing import List, Sequence, Union

import numpy as np

from ..exceptions import ConfigurationError

ArrayLike = Union[np.ndarray, Sequence[float], Sequence[Sequence[float]]]


class MathTransform(ABC):
    """
    Abstract base class for coordinate transforms.

    Subclasses implement ``transform_points`` on 2-D arrays and ``inverse``.
    """

    @property
    @abstractmethod
    def source_dimension(self) -> int:
        pass

    @property
    @abstractmethod
    def target_dimension(self) -> int:
        pass

    @property
    def is_identity(self) -> bool:
        return False

    @abstractmethod
    def transform_points(self, points: np.ndarray) -> np.ndarray:
        """
        Transform an ``(n, source_dimension)`` array.

        Parameters
        ----------
        points : np.ndarray
            Float array whose rows are coordinates

        Returns
        -------
        np.ndarray
            New ``(n, target_dimension)`` array
        """
        pass

    @abstractmethod
    def inverse(self) -> "MathTransform":
        pass

    def transform(self, coordinates: ArrayLike) -> np.ndarray:
        """
        Transform one coordinate or an array of coordinates.

        Parameters
        ----------
        coordinates : array-like
            A single coordinate ``(x, y[, z])`` or an ``(n, d)`` array

        Returns
        -------
        np.ndarray
            Array with the same leading shape as the input
        """
        points = np.array(coordinates, dtype=float)
        single = points.ndim == 1
        if single:
            points = points[np.newaxis, :]
        if points.ndim != 2:
            raise ValueError(
                f"Coordinates must be a 1-D or 2-D array, got shape {points.shape}"
            )
        if points.shape[1] != self.source_dimension:
            raise ValueError(
                f"{type(self).__name__} expects {self.source_dimension} ordinates "
                f"per coordinate, got {points.shape[1]}"
            )
        result = self.transform_points(points)
        return result[0] if single else result

    def inverse_transform(self, coordinates: ArrayLike) -> np.ndarray:
        return self.inverse().transform(coordinates)

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(source_dimension={self.source_dimension}, "
                f"target_dimension={self.target_dimension})")


class ElementaryTransform(MathTransform):
    """
    Transform defined by a pair of forward and inverse routines.

    ``inverse()`` returns a shallow copy with the direction flipped; the copy
    is cached so that ``t.inverse().inverse() is t``.
    """

    def __init__(self, source_dimension: int, target_dimension: int):
        self._source_dimension = source_dimension
        self._target_dimension = target_dimension
        self._is_inverse = False
        self._inverse_transform = None

    @property
    def source_dimension(self) -> int:
        if self._is_inverse:
            return self._target_dimension
        return self._source_dimension

    @property
    def target_dimension(self) -> int:
        if self._is_inverse:
            return self._source_dimension
        return self._target_dimension

    @property
    def is_inverse(self) -> bool:
        return self._is_inverse

    @abstractmethod
    def _forward(self, points: np.ndarray) -> np.ndarray:
        pass

    @abstractmethod
    def _inverse(self, points: np.ndarray) -> np.ndarray:
        pass

    def transform_points(self, points: np.ndarray) -> np.ndarray:
        if self._is_inverse:
            return self._inverse(points)
        return self._forward(points)

    def inverse(self) -> "ElementaryTransform":
        if self._inverse_transform is None:
            flipped = copy.copy(self)
            flipped._is_inverse = not self._is_inverse
            flipped._inverse_transform = self
            self._inverse_transform = flipped
        return self._inverse_transform

    def __repr__(self) -> str:
        suffix = ".inverse()" if self._is_inverse else ""
        return f"{type(self).__name__}({self._describe()}){suffix}"

    def _describe(self) -> str:
        return f"{self._source_dimension}->{self._target_dimension}"


class IdentityTransform(MathTransform):
    """Transform that returns an exact copy of its input."""

    def __init__(self, dimension: int = 2):
        self._dimension = dimension

    @property
    def source_dimension(self) -> int:
        return self._dimension

    @property
    def target_dimension(self) -> int:
        return self._dimension

    @property
    def is_identity(self) -> bool:
        return True

    def transform_points(self, points: np.ndarray) -> np.ndarray:
        return np.array(points, dtype=float, copy=True)

    def inverse(self) -> "IdentityTransform":
        return self


class DimensionTransform(ElementaryTransform):
    """
    Adapt the number of ordinates between two legs of a chain.

    Extra trailing ordinates are dropped; missing ones are filled with
    ``fill_value`` (an ellipsoidal height of zero, typically).
    """

    def __init__(self, source_dimension: int, target_dimension: int, fill_value: float = 0.0):
        super().__init__(source_dimension, target_dimension)
        self.fill_value = fill_value

    def _resize(self, points: np.ndarray, dimension: int) -> np.ndarray:
        n, d = points.shape
        if d >= dimension:
            return np.array(points[:, :dimension], copy=True)
        padded = np.full((n, dimension), self.fill_value, dtype=float)
        padded[:, :d] = points
        return padded

    def _forward(self, points: np.ndarray) -> np.ndarray:
        return self._resize(points, self._target_dimension)

    def _inverse(self, points: np.ndarray) -> np.ndarray:
        return self._resize(points, self._source_dimension)


class ConcatenatedTransform(MathTransform):
    """
    Ordered chain of transforms, each consuming the previous one's output.

    Adjacent dimensions are checked when the chain is built. The inverse is
    the reversed chain of the steps' own inverses.
    """

    def __init__(self, steps: Sequence[MathTransform]):
        steps = list(steps)
        if not steps:
            raise ConfigurationError("A concatenated transform needs at least one step")
        for previous, current in zip(steps, steps[1:]):
            if previous.target_dimension != current.source_dimension:
                raise ConfigurationError(
                    f"Cannot chain {previous!r} ({previous.target_dimension} ordinates) "
                    f"into {current!r} ({current.source_dimension} ordinates)"
                )
        self._steps = steps
        self._inverse_transform = None

    @property
    def steps(self) -> List[MathTransform]:
        return list(self._steps)

    @property
    def source_dimension(self) -> int:
        return self._steps[0].source_dimension

    @property
    def target_dimension(self) -> int:
        return self._steps[-1].target_dimension

    @property
    def is_identity(self) -> bool:
        return all(step.is_identity for step in self._steps)

    def transform_points(self, points: np.ndarray) -> np.ndarray:
        result = points
        for step in self._steps:
            result = step.transform_points(result)
        if result is points:
            result = np.array(points, copy=True)
        return result

    def inverse(self) -> "ConcatenatedTransform":
        if self._inverse_transform is None:
            flipped = ConcatenatedTransform([step.inverse() for step in reversed(self._steps)])
            flipped._inverse_transform = self
            self._inverse_transform = flipped
        return self._inverse_transform

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        inner = ", ".join(repr(step) for step in self._steps)
        return f"ConcatenatedTransform([{inner}])"

