"""
PyReproj: coordinate transformations between geographic, geocentric and
projected coordinate systems.

This library provides:
- An immutable model of ellipsoids, datums and coordinate systems
- Map projections and Bursa-Wolf datum shifts on numpy arrays
- A factory that chains the transforms between any two systems
- WKT reading through pyproj and WKT1 writing

xarray objects gain a .reproj accessor when the package is imported.
"""

__version__ = "0.1.0"

from .core import (CoordinateTransformation,  # noqa: F401
                   CoordinateTransformationFactory, TransformType)
from .crs import (AxisInfo, AxisOrientation, BursaWolfParameters,  # noqa: F401
                  DatumType, Ellipsoid, GeocentricCoordinateSystem,
                  GeographicCoordinateSystem, HorizontalDatum, PrimeMeridian,
                  ProjectedCoordinateSystem, Projection, ProjectionParameter,
                  from_pyproj, from_wkt, get_coordinate_system, read_srids,
                  to_wkt)
from .exceptions import (ConfigurationError, NumericDomainError,  # noqa: F401
                         PyReprojError, RegistrationConflictError,
                         UnsupportedConversionError)
from .projections import (ProjectionRegistry, default_registry,  # noqa: F401
                          is_northern_hemisphere, register,
                          utm_false_northing, utm_zone)
from .transforms import (AffineTransform, ConcatenatedTransform,  # noqa: F401
                         IdentityTransform, MathTransform)
from .accessors import ReprojAccessor  # noqa: F401

# Public API
__all__ = [
    "CoordinateTransformationFactory",
    "CoordinateTransformation",
    "TransformType",
    "Ellipsoid",
    "BursaWolfParameters",
    "DatumType",
    "HorizontalDatum",
    "PrimeMeridian",
    "AxisOrientation",
    "AxisInfo",
    "Projection",
    "ProjectionParameter",
    "GeographicCoordinateSystem",
    "GeocentricCoordinateSystem",
    "ProjectedCoordinateSystem",
    "from_wkt",
    "from_pyproj",
    "to_wkt",
    "read_srids",
    "get_coordinate_system",
    "MathTransform",
    "IdentityTransform",
    "ConcatenatedTransform",
    "AffineTransform",
    "ProjectionRegistry",
    "default_registry",
    "register",
    "utm_zone",
    "utm_false_northing",
    "is_northern_hemisphere",
    "ReprojAccessor",
    "PyReprojError",
    "ConfigurationError",
    "UnsupportedConversionError",
    "NumericDomainError",
    "RegistrationConflictError",
]
