"""
Core transformation factory for PyReproj.

``CoordinateTransformationFactory`` builds the chain of transforms between two
coordinate systems, routing through geographic and geocentric coordinates:

    projected -> geographic -> geocentric -> [datum shifts] -> geocentric
              -> geographic -> projected

Legs that are not needed (same datum, same ellipsoid, no projection) are
left out.
"""

import logging
import threading
import warnings
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from . import config
from .crs.models import (AxisOrientation, CoordinateSystem, DatumType,
                         GeocentricCoordinateSystem,
                         GeographicCoordinateSystem, HorizontalDatum,
                         ParameterList, ProjectedCoordinateSystem)
from .exceptions import ConfigurationError, UnsupportedConversionError
from .projections.registry import ProjectionRegistry, default_registry
from .transforms.affine import AffineTransform
from .transforms.base import (ConcatenatedTransform, DimensionTransform,
                              IdentityTransform, MathTransform)
from .transforms.datum_shift import BursaWolfTransform
from .transforms.geocentric import GeographicGeocentricTransform

logger = logging.getLogger(__name__)

CacheKey = Tuple[CoordinateSystem, CoordinateSystem, bool]

_AXIS_SLOTS = {
    AxisOrientation.EAST: (0, 1.0),
    AxisOrientation.WEST: (0, -1.0),
    AxisOrientation.NORTH: (1, 1.0),
    AxisOrientation.SOUTH: (1, -1.0),
    AxisOrientation.UP: (2, 1.0),
    AxisOrientation.DOWN: (2, -1.0),
}


class TransformType(Enum):
    """Nature of a coordinate transformation."""

    CONVERSION = "conversion"
    TRANSFORMATION = "transformation"
    CONVERSION_AND_TRANSFORMATION = "conversion_and_transformation"


@dataclass(frozen=True)
class CoordinateTransformation:
    """
    A transformation between two coordinate systems.

    Attributes
    ----------
    source_cs, target_cs : CoordinateSystem
        The systems the transformation connects
    math_transform : MathTransform
        The executable transform chain
    name : str
        Human readable description of the route
    transform_type : TransformType
        Whether a datum change is involved
    """

    source_cs: CoordinateSystem
    target_cs: CoordinateSystem
    math_transform: MathTransform
    name: str
    transform_type: TransformType

    def transform(self, coordinates) -> np.ndarray:
        return self.math_transform.transform(coordinates)

    def inverse_transform(self, coordinates) -> np.ndarray:
        return self.math_transform.inverse().transform(coordinates)


class CoordinateTransformationFactory:
    """
    Create transformations between geographic, geocentric and projected systems.

    Parameters
    ----------
    registry : ProjectionRegistry, optional
        Registry used to build projections; defaults to the built-in one
    cache_size : int, optional
        Number of transformations kept, least recently used first out
        (default: ``config.CACHE_SIZE``); 0 disables caching
    """

    def __init__(self, registry: Optional[ProjectionRegistry] = None,
                 cache_size: int = config.CACHE_SIZE):
        if cache_size < 0:
            raise ConfigurationError(f"cache_size must be non-negative, got {cache_size}")
        self.registry = registry if registry is not None else default_registry
        self.cache_size = cache_size
        self._cache: "OrderedDict[CacheKey, CoordinateTransformation]" = OrderedDict()
        self._lock = threading.Lock()

    def create_from_coordinate_systems(self, source: CoordinateSystem, target: CoordinateSystem,
                                       always_xy: bool = False) -> CoordinateTransformation:
        """
        Create a transformation from ``source`` to ``target``.

        Parameters
        ----------
        source, target : CoordinateSystem
            Geographic, geocentric or projected coordinate systems
        always_xy : bool, optional
            Ignore declared axis order and orientation and treat coordinates
            as easting/longitude first, northing/latitude second

        Returns
        -------
        CoordinateTransformation
            The transformation; its ``math_transform`` is shared between calls
            with the same arguments

        Raises
        ------
        UnsupportedConversionError
            If a system kind, datum or projection is not supported
        """
        key = (source, target, bool(always_xy))
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._cache.move_to_end(key)
        if cached is not None:
            logger.debug("Reusing transformation %s", cached.name)
            return cached

        transformation = self._create(source, target, bool(always_xy))
        if not self.cache_size:
            return transformation
        with self._lock:
            transformation = self._cache.setdefault(key, transformation)
            self._cache.move_to_end(key)
            while len(self._cache) > self.cache_size:
                self._cache.popitem(last=False)
        return transformation

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def _create(self, source: CoordinateSystem, target: CoordinateSystem,
                always_xy: bool) -> CoordinateTransformation:
        self._check_supported(source)
        self._check_supported(target)
        name = f"{source.name} -> {target.name}"

        if source == target:
            logger.debug("Identity transformation for %s", source.name)
            return CoordinateTransformation(source, target, IdentityTransform(source.dimension),
                                            name, TransformType.CONVERSION)

        steps: List[MathTransform] = []
        steps.extend(self._to_normalized(source, always_xy))
        datum_steps = self._datum_steps(source, target)
        steps.extend(datum_steps)
        steps.extend(step.inverse() for step in reversed(self._to_normalized(target, always_xy)))
        steps = self._join_dimensions([step for step in steps if not step.is_identity],
                                       source.dimension, target.dimension)

        if not steps:
            math_transform: MathTransform = IdentityTransform(source.dimension)
            if source.dimension != target.dimension:
                math_transform = DimensionTransform(source.dimension, target.dimension)
        else:
            math_transform = ConcatenatedTransform(steps)

        has_projection = source.kind == "projected" or target.kind == "projected"
        if source.datum.is_equivalent(target.datum):
            transform_type = TransformType.CONVERSION
        elif has_projection:
            transform_type = TransformType.CONVERSION_AND_TRANSFORMATION
        else:
            transform_type = TransformType.TRANSFORMATION
        logger.debug("Built %s transformation %s with %d step(s)",
                     transform_type.value, name, len(steps))
        return CoordinateTransformation(source, target, math_transform, name, transform_type)

    @staticmethod
    def _check_supported(cs: CoordinateSystem) -> None:
        if not isinstance(cs, (GeographicCoordinateSystem, GeocentricCoordinateSystem,
                               ProjectedCoordinateSystem)):
            raise UnsupportedConversionError(
                f"Coordinate system type {type(cs).__name__} is not supported"
            )
        datum = getattr(cs, "datum", None)
        if not isinstance(datum, HorizontalDatum) or datum.ellipsoid is None:
            raise UnsupportedConversionError(
                f"Coordinate system '{cs.name}' has no usable datum or ellipsoid"
            )

    @staticmethod
    def _axis_affine(cs: CoordinateSystem, scale: float, height_scale: float,
                     lon_offset: float, always_xy: bool) -> AffineTransform:
        """
        Affine step from the declared axes and units to (east, north[, up]).

        ``scale`` converts the horizontal unit, ``lon_offset`` is the prime
        meridian added to the east ordinate.
        """
        dimension = cs.dimension
        matrix = np.eye(dimension + 1)
        matrix[:dimension, :dimension] = 0.0
        scales = (scale, scale, height_scale)
        for index, axis in enumerate(cs.axes):
            if always_xy:
                slot, sign = index, 1.0
            else:
                slot, sign = _AXIS_SLOTS[axis.orientation]
            matrix[slot, index] = sign * scales[slot]
        matrix[0, dimension] = lon_offset
        return AffineTransform(matrix)

    def _to_normalized(self, cs: CoordinateSystem, always_xy: bool) -> List[MathTransform]:
        """
        Steps from ``cs`` to geographic radians on Greenwich, or geocentric metres.
        """
        if isinstance(cs, GeographicCoordinateSystem):
            return [self._axis_affine(cs, cs.angular_unit.radians_per_unit, 1.0,
                                      cs.prime_meridian.radians, always_xy)]

        if isinstance(cs, GeocentricCoordinateSystem):
            unit = cs.linear_unit.metres_per_unit
            return [AffineTransform.from_scale_and_offset([unit, unit, unit])]

        unit = cs.linear_unit.metres_per_unit
        steps: List[MathTransform] = [self._axis_affine(cs, unit, unit, 0.0, always_xy)]
        steps.append(self._create_projection(cs).inverse())
        prime_meridian = cs.geographic_cs.prime_meridian.radians
        if prime_meridian:
            offsets = [prime_meridian] + [0.0] * (cs.dimension - 1)
            steps.append(AffineTransform.from_scale_and_offset([1.0] * cs.dimension, offsets))
        return steps

    def _create_projection(self, cs: ProjectedCoordinateSystem):
        projection = cs.projection
        ellipsoid = cs.ellipsoid
        parameters = ParameterList(projection.parameters)
        parameters = list(parameters.items()) + [
            ("semi_major", ellipsoid.semi_major_axis),
            ("semi_minor", ellipsoid.semi_minor_axis),
        ]
        return self.registry.create(projection.class_name or projection.name, parameters,
                                    dimension=cs.dimension)

    def _datum_steps(self, source: CoordinateSystem, target: CoordinateSystem) -> List[MathTransform]:
        """
        Geocentric leg between two normalised systems.

        Returns an empty list when both sides share the ellipsoid and the
        shift parameters and neither side is geocentric.
        """
        source_datum, target_datum = source.datum, target.datum
        source_shift = source_datum.effective_to_wgs84
        target_shift = target_datum.effective_to_wgs84
        source_geocentric = source.kind == "geocentric"
        target_geocentric = target.kind == "geocentric"

        if source_shift != target_shift:
            self._warn_assumed_wgs84(source_datum, source_shift, target_shift)
            self._warn_assumed_wgs84(target_datum, target_shift, source_shift)
        same_shift = source_shift == target_shift
        same_ellipsoid = source_datum.ellipsoid.same_shape(target_datum.ellipsoid)
        if same_shift and same_ellipsoid and not (source_geocentric or target_geocentric):
            return []

        steps: List[MathTransform] = []
        if not source_geocentric:
            steps.append(GeographicGeocentricTransform(source_datum.ellipsoid,
                                                       self._geographic_dimension(source)))
        if not same_shift:
            if source_shift is not None:
                steps.append(BursaWolfTransform(source_shift))
            if target_shift is not None:
                steps.append(BursaWolfTransform(target_shift).inverse())
        if not target_geocentric:
            steps.append(GeographicGeocentricTransform(target_datum.ellipsoid,
                                                       self._geographic_dimension(target)).inverse())
        return steps

    @staticmethod
    def _geographic_dimension(cs: CoordinateSystem) -> int:
        return 3 if cs.dimension > 2 else 2

    @staticmethod
    def _warn_assumed_wgs84(datum: HorizontalDatum, shift, other_shift) -> None:
        if shift is None and other_shift is not None and datum.datum_type != DatumType.GEOCENTRIC:
            warnings.warn(
                f"Datum '{datum.name}' has no Bursa-Wolf parameters. "
                f"Assuming it coincides with WGS 84.",
                UserWarning
            )

    @staticmethod
    def _join_dimensions(steps: List[MathTransform], source_dimension: int,
                         target_dimension: int) -> List[MathTransform]:
        """
        Insert a DimensionTransform wherever adjacent steps disagree.

        The ends are matched against the source and target dimensions as well.
        """
        joined: List[MathTransform] = []
        dimension = source_dimension
        for step in steps:
            if dimension != step.source_dimension:
                joined.append(DimensionTransform(dimension, step.source_dimension))
            joined.append(step)
            dimension = step.target_dimension
        if joined and dimension != target_dimension:
            joined.append(DimensionTransform(dimension, target_dimension))
        return joined
