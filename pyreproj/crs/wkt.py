"""
WKT support for PyReproj.

Reading is delegated to pyproj: the text is parsed by ``pyproj.CRS`` and the
resulting object graph is adapted into the immutable PyReproj data model.
Projection methods and parameters are matched by their EPSG codes, so the
same definition read from WKT1, WKT2 or a PROJ string yields the same model.

Writing produces OGC WKT1, the format the model mirrors.
"""

import math
from typing import Any, List, Optional, Tuple, Union

from pyproj import CRS
from pyproj.exceptions import CRSError

from ..exceptions import ConfigurationError, UnsupportedConversionError
from .models import (DEGREE, GRAD, METRE, RADIAN, AngularUnit, AxisInfo,
                     AxisOrientation, BursaWolfParameters, CoordinateSystem,
                     DatumType, Ellipsoid, GeocentricCoordinateSystem,
                     GeographicCoordinateSystem, HorizontalDatum, LinearUnit,
                     PrimeMeridian, ProjectedCoordinateSystem, Projection,
                     ProjectionParameter, normalize_name)

# EPSG operation method code -> registry projection name
PROJECTION_METHODS = {
    "9807": "Transverse_Mercator",
    "9804": "Mercator_1SP",
    "9805": "Mercator_2SP",
    "1024": "Popular_Visualisation Pseudo-Mercator",
    "9822": "Albers_Conic_Equal_Area",
    "9802": "Lambert_Conformal_Conic_2SP",
    "9819": "Krovak",
    "1041": "Krovak",
    "9818": "Polyconic",
    "9806": "Cassini_Soldner",
    "9812": "Hotine_Oblique_Mercator",
    "9815": "Oblique_Mercator",
    "9809": "Oblique_Stereographic",
}

# EPSG parameter code -> WKT1 parameter name
PROJECTION_PARAMETERS = {
    "8801": "latitude_of_origin",
    "8802": "central_meridian",
    "8805": "scale_factor",
    "8806": "false_easting",
    "8807": "false_northing",
    "8821": "latitude_of_origin",
    "8822": "central_meridian",
    "8823": "standard_parallel_1",
    "8824": "standard_parallel_2",
    "8826": "false_easting",
    "8827": "false_northing",
    "8811": "latitude_of_center",
    "8812": "longitude_of_center",
    "8813": "azimuth",
    "8814": "rectified_grid_angle",
    "8815": "scale_factor",
    "8816": "false_easting",
    "8817": "false_northing",
    "8833": "longitude_of_center",
    "1036": "azimuth",
    "8818": "pseudo_standard_parallel_1",
    "8819": "scale_factor",
}

_WGS84_DATUM_NAMES = ("wgs_1984", "wgs84", "wgs_84", "world_geodetic_system_1984")


def from_wkt(text: str) -> CoordinateSystem:
    """
    Parse a WKT (1 or 2) coordinate system definition.

    Parameters
    ----------
    text : str
        WKT text

    Returns
    -------
    CoordinateSystem
        Geographic, geocentric or projected system

    Raises
    ------
    ConfigurationError
        If pyproj cannot parse the text
    UnsupportedConversionError
        If the system is of another kind (vertical, compound, ...)
    """
    try:
        crs = CRS.from_wkt(text)
    except CRSError as exc:
        raise ConfigurationError(f"Invalid WKT: {exc}") from exc
    return from_pyproj(crs)


def from_pyproj(crs: Union[CRS, str, int, Any]) -> CoordinateSystem:
    """
    Convert a pyproj CRS (or anything ``pyproj.CRS.from_user_input`` accepts).

    A bound CRS (WKT1 with ``TOWGS84``) becomes a datum carrying
    ``BursaWolfParameters``.
    """
    if not isinstance(crs, CRS):
        try:
            crs = CRS.from_user_input(crs)
        except CRSError as exc:
            raise ConfigurationError(f"Invalid CRS definition {crs!r}: {exc}") from exc

    to_wgs84 = None
    if crs.is_bound:
        values = crs.coordinate_operation.towgs84 if crs.coordinate_operation else []
        if values:
            to_wgs84 = BursaWolfParameters.from_sequence(values)
        crs = crs.source_crs

    if crs.is_projected:
        return _projected(crs, to_wgs84)
    if _is_geocentric(crs):
        return GeocentricCoordinateSystem(
            crs.name,
            datum=_datum(crs, to_wgs84),
            linear_unit=_linear_unit(crs.axis_info),
            prime_meridian=_prime_meridian(crs),
            **_authority(crs),
        )
    if crs.is_geographic:
        return _geographic(crs, to_wgs84)
    raise UnsupportedConversionError(f"Coordinate system '{crs.name}' is not supported: {crs.type_name}")


def _is_geocentric(crs: CRS) -> bool:
    # PROJ reads a GEOCCS with EAST/NORTH axes as a geodetic CRS on a cartesian system
    if crs.is_geocentric:
        return True
    cs = crs.coordinate_system
    return crs.type_name == "Geodetic CRS" and cs is not None and cs.name == "cartesian"


def _authority(obj) -> dict:
    identifier = obj.to_json_dict().get("id")
    if not identifier:
        return {}
    code = identifier.get("code")
    try:
        code = int(code)
    except (TypeError, ValueError):
        return {}
    return {"authority": identifier.get("authority"), "authority_code": code}


def _ellipsoid(crs: CRS) -> Ellipsoid:
    ellipsoid = crs.ellipsoid
    if ellipsoid is None:
        raise UnsupportedConversionError(f"Coordinate system '{crs.name}' has no ellipsoid")
    if ellipsoid.inverse_flattening and math.isfinite(ellipsoid.inverse_flattening):
        return Ellipsoid(ellipsoid.name, ellipsoid.semi_major_metre,
                         ellipsoid.inverse_flattening, **_authority(ellipsoid))
    return Ellipsoid.from_semi_minor(ellipsoid.name, ellipsoid.semi_major_metre,
                                     ellipsoid.semi_minor_metre, **_authority(ellipsoid))


def _datum(crs: CRS, to_wgs84: Optional[BursaWolfParameters]) -> HorizontalDatum:
    datum = crs.datum
    if datum is None:
        raise UnsupportedConversionError(f"Coordinate system '{crs.name}' has no datum")
    authority = _authority(datum)
    key = normalize_name(datum.name)
    if any(name in key for name in _WGS84_DATUM_NAMES) or authority.get("authority_code") == 6326:
        datum_type = DatumType.GEOCENTRIC
    else:
        datum_type = DatumType.CLASSIC
    return HorizontalDatum(datum.name, _ellipsoid(crs), to_wgs84, datum_type, **authority)


def _prime_meridian(crs: CRS) -> PrimeMeridian:
    meridian = crs.prime_meridian
    if meridian is None:
        return PrimeMeridian()
    longitude = math.degrees(meridian.longitude * meridian.unit_conversion_factor)
    return PrimeMeridian(meridian.name, longitude, DEGREE)


def _angular_unit(axis_info: List[Any]) -> AngularUnit:
    if not axis_info:
        return DEGREE
    factor = axis_info[0].unit_conversion_factor
    for unit in (DEGREE, RADIAN, GRAD):
        if math.isclose(factor, unit.radians_per_unit, rel_tol=1e-12):
            return unit
    return AngularUnit(axis_info[0].unit_name, factor)


def _linear_unit(axis_info: List[Any]) -> LinearUnit:
    if not axis_info or axis_info[0].unit_conversion_factor == 1.0:
        return METRE
    return LinearUnit(axis_info[0].unit_name, axis_info[0].unit_conversion_factor)


def _axes(axis_info: List[Any]) -> Tuple[AxisInfo, ...]:
    axes = []
    for axis in axis_info:
        try:
            orientation = AxisOrientation(axis.direction.upper())
        except ValueError:
            orientation = AxisOrientation.OTHER
        axes.append(AxisInfo(axis.name, orientation))
    return tuple(axes)


def _geographic(crs: CRS, to_wgs84: Optional[BursaWolfParameters]) -> GeographicCoordinateSystem:
    kwargs = _authority(crs)
    axes = _axes(crs.axis_info)
    if axes:
        kwargs["axes"] = axes
    return GeographicCoordinateSystem(
        crs.name,
        angular_unit=_angular_unit(crs.axis_info),
        datum=_datum(crs, to_wgs84),
        prime_meridian=_prime_meridian(crs),
        **kwargs,
    )


def _projection_parameter(param) -> ProjectionParameter:
    name = PROJECTION_PARAMETERS.get(str(param.code)) if param.auth_name == "EPSG" else None
    name = name or normalize_name(param.name)
    value = param.value
    if param.unit_category == "angular":
        value = math.degrees(value * param.unit_conversion_factor)
    elif param.unit_category == "linear":
        value = value * param.unit_conversion_factor
    return ProjectionParameter(name, value)


def _projected(crs: CRS, to_wgs84: Optional[BursaWolfParameters]) -> ProjectedCoordinateSystem:
    operation = crs.coordinate_operation
    if operation is None:
        raise UnsupportedConversionError(f"Projected system '{crs.name}' has no projection")
    class_name = None
    if operation.method_auth_name == "EPSG":
        class_name = PROJECTION_METHODS.get(str(operation.method_code))
    class_name = class_name or normalize_name(operation.method_name)
    projection = Projection(
        operation.name,
        class_name,
        tuple(_projection_parameter(param) for param in operation.params),
        **_authority(operation),
    )
    kwargs = _authority(crs)
    axes = _axes(crs.axis_info)
    if axes:
        kwargs["axes"] = axes
    return ProjectedCoordinateSystem(
        crs.name,
        _geographic(crs.geodetic_crs, to_wgs84),
        projection,
        linear_unit=_linear_unit(crs.axis_info),
        **kwargs,
    )


def _number(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def _quote(text: str) -> str:
    return '"' + str(text).replace('"', '""') + '"'


def _authority_node(authority: Optional[str], code: Optional[int]) -> List[str]:
    if authority and code is not None:
        return [f"AUTHORITY[{_quote(authority)},{_quote(code)}]"]
    return []


def _axis_nodes(axes: Tuple[AxisInfo, ...]) -> List[str]:
    return [f"AXIS[{_quote(axis.name)},{axis.orientation.value}]" for axis in axes]


def _datum_wkt(datum: HorizontalDatum) -> str:
    ellipsoid = datum.ellipsoid
    inverse_flattening = 0.0 if ellipsoid.is_sphere else ellipsoid.inverse_flattening
    spheroid = [_quote(ellipsoid.name), _number(ellipsoid.semi_major_axis),
                _number(inverse_flattening)]
    spheroid += _authority_node(ellipsoid.authority, ellipsoid.authority_code)
    parts = [_quote(datum.name), f"SPHEROID[{','.join(spheroid)}]"]
    if datum.to_wgs84 is not None:
        parts.append(f"TOWGS84[{','.join(_number(v) for v in datum.to_wgs84.as_list())}]")
    parts += _authority_node(datum.authority, datum.authority_code)
    return f"DATUM[{','.join(parts)}]"


_LINEAR_PARAMETERS = ("false_easting", "false_northing")
_UNITLESS_PARAMETERS = ("scale_factor", "semi_major", "semi_minor")


def _parameter_wkt(parameter: ProjectionParameter, cs: ProjectedCoordinateSystem) -> str:
    key = normalize_name(parameter.name)
    value = parameter.value
    if key in _LINEAR_PARAMETERS:
        value = value / cs.linear_unit.metres_per_unit
    elif key not in _UNITLESS_PARAMETERS and cs.geographic_cs.angular_unit != DEGREE:
        value = math.radians(value) / cs.geographic_cs.angular_unit.radians_per_unit
    return f"PARAMETER[{_quote(parameter.name)},{_number(value)}]"


def _primem_wkt(meridian: PrimeMeridian) -> str:
    longitude = math.degrees(meridian.radians)
    return f"PRIMEM[{_quote(meridian.name)},{_number(longitude)}]"


def _geographic_wkt(cs: GeographicCoordinateSystem) -> str:
    unit = cs.angular_unit
    parts = [_quote(cs.name), _datum_wkt(cs.datum), _primem_wkt(cs.prime_meridian),
             f"UNIT[{_quote(unit.name)},{_number(unit.radians_per_unit)}]"]
    parts += _axis_nodes(cs.axes)
    parts += _authority_node(cs.authority, cs.authority_code)
    return f"GEOGCS[{','.join(parts)}]"


def to_wkt(cs: CoordinateSystem) -> str:
    """
    Write a coordinate system as single-line OGC WKT1.

    Projection parameters are written in the units of the enclosing system:
    linear ones in the PROJCS unit, angular ones in the GEOGCS unit.
    """
    if isinstance(cs, GeographicCoordinateSystem):
        return _geographic_wkt(cs)
    if isinstance(cs, GeocentricCoordinateSystem):
        unit = cs.linear_unit
        parts = [_quote(cs.name), _datum_wkt(cs.datum), _primem_wkt(cs.prime_meridian),
                 f"UNIT[{_quote(unit.name)},{_number(unit.metres_per_unit)}]"]
        parts += ['AXIS["Geocentric X",OTHER]', 'AXIS["Geocentric Y",OTHER]',
                  'AXIS["Geocentric Z",NORTH]']
        parts += _authority_node(cs.authority, cs.authority_code)
        return f"GEOCCS[{','.join(parts)}]"
    if isinstance(cs, ProjectedCoordinateSystem):
        unit = cs.linear_unit
        projection = cs.projection
        parts = [_quote(cs.name), _geographic_wkt(cs.geographic_cs),
                 f"PROJECTION[{_quote(projection.class_name)}]"]
        parts += [_parameter_wkt(p, cs) for p in projection.parameters]
        parts.append(f"UNIT[{_quote(unit.name)},{_number(unit.metres_per_unit)}]")
        parts += _axis_nodes(cs.axes)
        parts += _authority_node(cs.authority, cs.authority_code)
        return f"PROJCS[{','.join(parts)}]"
    raise UnsupportedConversionError(f"Cannot write WKT for {type(cs).__name__}")
