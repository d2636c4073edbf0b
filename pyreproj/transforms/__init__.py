"""
Coordinate transforms: the transform contract, composition and the
elementary geodetic transforms.
"""

from .affine import AffineTransform
from .base import (ConcatenatedTransform, DimensionTransform,
                   ElementaryTransform, IdentityTransform, MathTransform)
from .datum_shift import BursaWolfTransform
from .geocentric import GeographicGeocentricTransform

__all__ = [
    "MathTransform",
    "ElementaryTransform",
    "IdentityTransform",
    "DimensionTransform",
    "ConcatenatedTransform",
    "AffineTransform",
    "GeographicGeocentricTransform",
    "BursaWolfTransform",
]
