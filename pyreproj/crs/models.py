"""
Coordinate reference system data model for PyReproj.

This module provides immutable carriers for:
- Ellipsoids, prime meridians and units
- Horizontal datums with optional Bursa-Wolf parameters to WGS 84
- Geographic, geocentric and projected coordinate systems
- Projection descriptions and their named parameters

All objects are frozen dataclasses, so they are hashable and can be shared
between threads and used as cache keys.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator, Mapping, Optional, Tuple, Union

from ..exceptions import ConfigurationError


@dataclass(frozen=True)
class AngularUnit:
    """Angular unit expressed as the number of radians per unit."""

    name: str
    radians_per_unit: float


@dataclass(frozen=True)
class LinearUnit:
    """Linear unit expressed as the number of metres per unit."""

    name: str
    metres_per_unit: float


DEGREE = AngularUnit("degree", math.pi / 180.0)
RADIAN = AngularUnit("radian", 1.0)
GRAD = AngularUnit("grad", math.pi / 200.0)

METRE = LinearUnit("metre", 1.0)
FOOT = LinearUnit("foot", 0.3048)
US_SURVEY_FOOT = LinearUnit("US survey foot", 1200.0 / 3937.0)


@dataclass(frozen=True)
class Ellipsoid:
    """
    Reference ellipsoid.

    An ``inverse_flattening`` of 0 or infinity describes a sphere.
    """

    name: str
    semi_major_axis: float
    inverse_flattening: float
    authority: Optional[str] = None
    authority_code: Optional[int] = None

    def __post_init__(self):
        if not math.isfinite(self.semi_major_axis) or self.semi_major_axis <= 0:
            raise ConfigurationError(
                f"Ellipsoid '{self.name}' must have a positive semi-major axis, "
                f"got {self.semi_major_axis}"
            )
        inv_f = self.inverse_flattening
        if math.isnan(inv_f) or inv_f < 0 or (0 < inv_f <= 1):
            raise ConfigurationError(
                f"Ellipsoid '{self.name}' has an invalid inverse flattening {inv_f}; "
                f"the eccentricity must be smaller than 1"
            )

    @classmethod
    def from_semi_minor(cls, name: str, semi_major_axis: float, semi_minor_axis: float,
                        **kwargs) -> "Ellipsoid":
        """Create an ellipsoid from its two semi-axes."""
        if semi_minor_axis <= 0 or semi_minor_axis > semi_major_axis:
            raise ConfigurationError(
                f"Ellipsoid '{name}' needs 0 < semi-minor <= semi-major, "
                f"got {semi_minor_axis} and {semi_major_axis}"
            )
        if semi_minor_axis == semi_major_axis:
            inverse_flattening = 0.0
        else:
            inverse_flattening = semi_major_axis / (semi_major_axis - semi_minor_axis)
        return cls(name, semi_major_axis, inverse_flattening, **kwargs)

    @property
    def is_sphere(self) -> bool:
        return self.inverse_flattening == 0 or math.isinf(self.inverse_flattening)

    @property
    def flattening(self) -> float:
        return 0.0 if self.is_sphere else 1.0 / self.inverse_flattening

    @property
    def semi_minor_axis(self) -> float:
        return self.semi_major_axis * (1.0 - self.flattening)

    @property
    def eccentricity_squared(self) -> float:
        f = self.flattening
        return f * (2.0 - f)

    @property
    def eccentricity(self) -> float:
        return math.sqrt(self.eccentricity_squared)

    def same_shape(self, other: "Ellipsoid") -> bool:
        """Compare the geometry of two ellipsoids, ignoring names."""
        return (math.isclose(self.semi_major_axis, other.semi_major_axis,
                             rel_tol=1e-12, abs_tol=1e-9)
                and math.isclose(self.semi_minor_axis, other.semi_minor_axis,
                                 rel_tol=1e-12, abs_tol=1e-9))


WGS84 = Ellipsoid("WGS 84", 6378137.0, 298.257223563, "EPSG", 7030)
GRS80 = Ellipsoid("GRS 1980", 6378137.0, 298.257222101, "EPSG", 7019)
INTERNATIONAL_1924 = Ellipsoid("International 1924", 6378388.0, 297.0, "EPSG", 7022)
CLARKE_1866 = Ellipsoid("Clarke 1866", 6378206.4, 294.9786982138982, "EPSG", 7008)
BESSEL_1841 = Ellipsoid("Bessel 1841", 6377397.155, 299.1528128, "EPSG", 7004)
SPHERE = Ellipsoid("Sphere", 6371000.0, 0.0)


@dataclass(frozen=True)
class BursaWolfParameters:
    """
    Seven-parameter similarity transform to WGS 84 (position vector convention).

    Translations are in metres, rotations in arc-seconds and the scale
    correction in parts per million, matching the WKT ``TOWGS84`` node.
    """

    dx: float = 0.0
    dy: float = 0.0
    dz: float = 0.0
    ex: float = 0.0
    ey: float = 0.0
    ez: float = 0.0
    ppm: float = 0.0

    @classmethod
    def from_sequence(cls, values: Iterable[float]) -> "BursaWolfParameters":
        """Build from the 3 or 7 values of a ``TOWGS84`` node."""
        values = [float(v) for v in values]
        if len(values) not in (3, 7):
            raise ConfigurationError(
                f"Bursa-Wolf parameters need 3 or 7 values, got {len(values)}"
            )
        return cls(*values)

    @property
    def has_zero_values_only(self) -> bool:
        return not any(self.as_list())

    def as_list(self) -> list:
        return [self.dx, self.dy, self.dz, self.ex, self.ey, self.ez, self.ppm]


class DatumType(Enum):
    """Classification of horizontal datums."""

    GEOCENTRIC = "HD_Geocentric"
    CLASSIC = "HD_Classic"
    OTHER = "HD_Other"


@dataclass(frozen=True)
class HorizontalDatum:
    """Horizontal datum: an ellipsoid plus its relation to WGS 84."""

    name: str
    ellipsoid: Ellipsoid
    to_wgs84: Optional[BursaWolfParameters] = None
    datum_type: DatumType = DatumType.CLASSIC
    authority: Optional[str] = None
    authority_code: Optional[int] = None

    @classmethod
    def wgs84(cls) -> "HorizontalDatum":
        return cls("WGS_1984", WGS84, None, DatumType.GEOCENTRIC, "EPSG", 6326)

    @property
    def effective_to_wgs84(self) -> Optional[BursaWolfParameters]:
        """Bursa-Wolf parameters, or None when absent or all zero."""
        if self.to_wgs84 is None or self.to_wgs84.has_zero_values_only:
            return None
        return self.to_wgs84

    def is_equivalent(self, other: "HorizontalDatum") -> bool:
        """Structural comparison of ellipsoid and shift parameters."""
        return (self.ellipsoid.same_shape(other.ellipsoid)
                and self.effective_to_wgs84 == other.effective_to_wgs84)


@dataclass(frozen=True)
class PrimeMeridian:
    """Prime meridian, as a longitude east of Greenwich."""

    name: str = "Greenwich"
    longitude: float = 0.0
    angular_unit: AngularUnit = DEGREE

    @property
    def radians(self) -> float:
        return self.longitude * self.angular_unit.radians_per_unit


GREENWICH = PrimeMeridian()


class AxisOrientation(Enum):
    """Direction of a coordinate system axis."""

    EAST = "EAST"
    WEST = "WEST"
    NORTH = "NORTH"
    SOUTH = "SOUTH"
    UP = "UP"
    DOWN = "DOWN"
    OTHER = "OTHER"


@dataclass(frozen=True)
class AxisInfo:
    name: str
    orientation: AxisOrientation


_AXIS_GROUPS = {
    AxisOrientation.EAST: "east",
    AxisOrientation.WEST: "east",
    AxisOrientation.NORTH: "north",
    AxisOrientation.SOUTH: "north",
    AxisOrientation.UP: "up",
    AxisOrientation.DOWN: "up",
}


def _validate_axes(name: str, axes: Tuple[AxisInfo, ...]) -> None:
    if len(axes) not in (2, 3):
        raise ConfigurationError(
            f"Coordinate system '{name}' needs 2 or 3 axes, got {len(axes)}"
        )
    groups = [_AXIS_GROUPS.get(axis.orientation) for axis in axes]
    if sorted(groups[:2], key=str) != ["east", "north"]:
        orientations = ", ".join(axis.orientation.value for axis in axes)
        raise ConfigurationError(
            f"Axis orientations of '{name}' are not orthogonal: {orientations}"
        )
    if len(axes) == 3 and groups[2] != "up":
        raise ConfigurationError(
            f"Third axis of '{name}' must point up or down, got {axes[2].orientation.value}"
        )


@dataclass(frozen=True)
class ProjectionParameter:
    name: str
    value: float


def normalize_name(name: str) -> str:
    """Lower-case a name and replace spaces with underscores."""
    return name.strip().lower().replace(" ", "_")


_MISSING = object()

ParameterSource = Union["ParameterList", Mapping[str, float],
                        Iterable[Union[ProjectionParameter, Tuple[str, float]]]]


class ParameterList:
    """
    Case-insensitive view over projection parameters.

    Accepts a mapping, an iterable of ``ProjectionParameter`` or an iterable of
    ``(name, value)`` pairs. Later entries override earlier ones.
    """

    def __init__(self, parameters: Optional[ParameterSource] = None):
        self._values = {}
        if parameters is None:
            return
        if isinstance(parameters, ParameterList):
            items = parameters.items()
        elif isinstance(parameters, Mapping):
            items = parameters.items()
        else:
            items = []
            for parameter in parameters:
                if isinstance(parameter, ProjectionParameter):
                    items.append((parameter.name, parameter.value))
                else:
                    parameter_name, value = parameter
                    items.append((parameter_name, value))
        for parameter_name, value in items:
            try:
                self._values[normalize_name(parameter_name)] = float(value)
            except (TypeError, ValueError) as exc:
                raise ConfigurationError(
                    f"Projection parameter '{parameter_name}' is not numeric: {value!r}"
                ) from exc

    def get(self, *names: str, default: Any = _MISSING) -> float:
        """
        Return the first parameter found among ``names``.

        Raises
        ------
        ConfigurationError
            If none of the names is present and no default is given.
        """
        for parameter_name in names:
            key = normalize_name(parameter_name)
            if key in self._values:
                return self._values[key]
        if default is _MISSING:
            raise ConfigurationError(
                f"Missing required projection parameter '{names[0]}'"
            )
        return default

    def items(self) -> Iterator[Tuple[str, float]]:
        return iter(self._values.items())

    def __contains__(self, name: str) -> bool:
        return normalize_name(name) in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ParameterList({self._values!r})"


@dataclass(frozen=True)
class Projection:
    """A projection method name plus its ordered parameters."""

    name: str
    class_name: str
    parameters: Tuple[ProjectionParameter, ...] = ()
    authority: Optional[str] = None
    authority_code: Optional[int] = None

    def __post_init__(self):
        parameters = self.parameters
        if isinstance(parameters, Mapping):
            parameters = [ProjectionParameter(k, float(v)) for k, v in parameters.items()]
        object.__setattr__(self, "parameters", tuple(
            p if isinstance(p, ProjectionParameter) else ProjectionParameter(p[0], float(p[1]))
            for p in parameters
        ))

    def get_parameter(self, name: str, default: Optional[float] = None) -> Optional[float]:
        return ParameterList(self.parameters).get(name, default=default)


class CoordinateSystem:
    """Common interface of geographic, geocentric and projected systems."""

    kind = "unknown"

    @property
    def dimension(self) -> int:
        return len(self.axes)

    @property
    def wkt(self) -> str:
        from .wkt import to_wkt
        return to_wkt(self)


_LON_LAT = (AxisInfo("Lon", AxisOrientation.EAST), AxisInfo("Lat", AxisOrientation.NORTH))
_EAST_NORTH = (AxisInfo("East", AxisOrientation.EAST), AxisInfo("North", AxisOrientation.NORTH))
_GEOCENTRIC_AXES = (AxisInfo("X", AxisOrientation.OTHER), AxisInfo("Y", AxisOrientation.OTHER),
                    AxisInfo("Z", AxisOrientation.NORTH))


@dataclass(frozen=True)
class GeographicCoordinateSystem(CoordinateSystem):
    name: str
    angular_unit: AngularUnit = DEGREE
    datum: HorizontalDatum = field(default_factory=HorizontalDatum.wgs84)
    prime_meridian: PrimeMeridian = GREENWICH
    axes: Tuple[AxisInfo, ...] = _LON_LAT
    authority: Optional[str] = None
    authority_code: Optional[int] = None

    kind = "geographic"

    def __post_init__(self):
        object.__setattr__(self, "axes", tuple(self.axes))
        _validate_axes(self.name, self.axes)

    @property
    def ellipsoid(self) -> Ellipsoid:
        return self.datum.ellipsoid

    @classmethod
    def wgs84(cls) -> "GeographicCoordinateSystem":
        """The WGS 84 geographic system in longitude/latitude order."""
        return cls("WGS 84", authority="EPSG", authority_code=4326)


@dataclass(frozen=True)
class GeocentricCoordinateSystem(CoordinateSystem):
    name: str
    datum: HorizontalDatum = field(default_factory=HorizontalDatum.wgs84)
    linear_unit: LinearUnit = METRE
    prime_meridian: PrimeMeridian = GREENWICH
    axes: Tuple[AxisInfo, ...] = _GEOCENTRIC_AXES
    authority: Optional[str] = None
    authority_code: Optional[int] = None

    kind = "geocentric"

    def __post_init__(self):
        object.__setattr__(self, "axes", tuple(self.axes))
        if len(self.axes) != 3:
            raise ConfigurationError(
                f"Geocentric system '{self.name}' needs 3 axes, got {len(self.axes)}"
            )

    @property
    def ellipsoid(self) -> Ellipsoid:
        return self.datum.ellipsoid

    @classmethod
    def wgs84(cls) -> "GeocentricCoordinateSystem":
        return cls("WGS 84", authority="EPSG", authority_code=4978)


@dataclass(frozen=True)
class ProjectedCoordinateSystem(CoordinateSystem):
    name: str
    geographic_cs: GeographicCoordinateSystem
    projection: Projection
    linear_unit: LinearUnit = METRE
    axes: Tuple[AxisInfo, ...] = _EAST_NORTH
    authority: Optional[str] = None
    authority_code: Optional[int] = None

    kind = "projected"

    def __post_init__(self):
        object.__setattr__(self, "axes", tuple(self.axes))
        _validate_axes(self.name, self.axes)

    @property
    def datum(self) -> HorizontalDatum:
        return self.geographic_cs.datum

    @property
    def ellipsoid(self) -> Ellipsoid:
        return self.geographic_cs.datum.ellipsoid

    @classmethod
    def wgs84_utm(cls, zone: int, north: bool = True) -> "ProjectedCoordinateSystem":
        """
        WGS 84 / UTM projected system.

        Parameters
        ----------
        zone : int
            UTM zone number between 1 and 60
        north : bool, optional
            Northern hemisphere (false northing 0) or southern (10 000 km)
        """
        from ..projections.utm import SOUTHERN_FALSE_NORTHING

        if not 1 <= int(zone) <= 60:
            raise ConfigurationError(f"UTM zone must be between 1 and 60, got {zone}")
        zone = int(zone)
        hemisphere = "N" if north else "S"
        projection = Projection(
            f"UTM zone {zone}{hemisphere}",
            "Transverse_Mercator",
            (
                ProjectionParameter("latitude_of_origin", 0.0),
                ProjectionParameter("central_meridian", zone * 6.0 - 183.0),
                ProjectionParameter("scale_factor", 0.9996),
                ProjectionParameter("false_easting", 500000.0),
                ProjectionParameter("false_northing", 0.0 if north else SOUTHERN_FALSE_NORTHING),
            ),
        )
        return cls(
            f"WGS 84 / UTM zone {zone}{hemisphere}",
            GeographicCoordinateSystem.wgs84(),
            projection,
            authority="EPSG",
            authority_code=(32600 if north else 32700) + zone,
        )
