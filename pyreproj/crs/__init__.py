"""
Coordinate system model for PyReproj.

This module holds the immutable description of ellipsoids, datums and
coordinate systems, plus WKT and SRID table support built on pyproj.
"""

from .models import (BESSEL_1841, CLARKE_1866, DEGREE, FOOT, GRAD, GREENWICH,
                     GRS80, INTERNATIONAL_1924, METRE, RADIAN, SPHERE,
                     US_SURVEY_FOOT, WGS84, AngularUnit, AxisInfo,
                     AxisOrientation, BursaWolfParameters, CoordinateSystem,
                     DatumType, Ellipsoid, GeocentricCoordinateSystem,
                     GeographicCoordinateSystem, HorizontalDatum, LinearUnit,
                     ParameterList, PrimeMeridian, ProjectedCoordinateSystem,
                     Projection, ProjectionParameter)
from .srid import SridEntry, get_coordinate_system, read_srids
from .wkt import from_pyproj, from_wkt, to_wkt

__all__ = [
    'AngularUnit', 'LinearUnit', 'DEGREE', 'RADIAN', 'GRAD', 'METRE', 'FOOT',
    'US_SURVEY_FOOT', 'Ellipsoid', 'WGS84', 'GRS80', 'INTERNATIONAL_1924',
    'CLARKE_1866', 'BESSEL_1841', 'SPHERE', 'BursaWolfParameters', 'DatumType',
    'HorizontalDatum', 'PrimeMeridian', 'GREENWICH', 'AxisOrientation', 'AxisInfo',
    'ProjectionParameter', 'ParameterList', 'Projection', 'CoordinateSystem',
    'GeographicCoordinateSystem', 'GeocentricCoordinateSystem',
    'ProjectedCoordinateSystem', 'from_wkt', 'from_pyproj', 'to_wkt',
    'SridEntry', 'read_srids', 'get_coordinate_system',
]
