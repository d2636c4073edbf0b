"""
PyReproj Accessor implementation.

This module implements the xarray accessor that provides the .reproj interface.
"""

from typing import Any, Union

import numpy as np
import xarray as xr

from ..core import CoordinateTransformation, CoordinateTransformationFactory
from ..crs.models import CoordinateSystem
from ..crs.wkt import from_pyproj

_factory = CoordinateTransformationFactory()

CRSLike = Union[CoordinateSystem, str, int, Any]


def _as_coordinate_system(crs: CRSLike) -> CoordinateSystem:
    if isinstance(crs, CoordinateSystem):
        return crs
    return from_pyproj(crs)


@xr.register_dataset_accessor("reproj")
@xr.register_dataarray_accessor("reproj")
class ReprojAccessor:
    """
    xarray accessor for PyReproj functionality.

    This accessor provides methods for:
    - Building a transformation between two coordinate systems
    - Adding transformed coordinates to a Dataset or DataArray
    """

    def __init__(self, xarray_obj: Union[xr.Dataset, xr.DataArray]):
        self._obj = xarray_obj
        self._name = "reproj"

    def transformation(self, source: CRSLike, target: CRSLike,
                       always_xy: bool = True) -> CoordinateTransformation:
        """
        Build (or reuse) the transformation between two coordinate systems.

        ``source`` and ``target`` may be PyReproj coordinate systems or
        anything pyproj understands (EPSG code, WKT, PROJ string, ``pyproj.CRS``).
        """
        return _factory.create_from_coordinate_systems(
            _as_coordinate_system(source), _as_coordinate_system(target), always_xy=always_xy
        )

    def transform_coords(
        self,
        source: CRSLike,
        target: CRSLike,
        x: str = "lon",
        y: str = "lat",
        x_out: str = "x",
        y_out: str = "y",
        always_xy: bool = True,
    ) -> Union[xr.Dataset, xr.DataArray]:
        """
        Transform two coordinate variables and attach the result as new coordinates.

        Parameters
        ----------
        source : CoordinateSystem, str, int or pyproj.CRS
            Coordinate system of ``x`` and ``y``
        target : CoordinateSystem, str, int or pyproj.CRS
            Coordinate system of the output coordinates
        x, y : str, optional
            Names of the input coordinates (default: 'lon', 'lat')
        x_out, y_out : str, optional
            Names of the output coordinates (default: 'x', 'y')
        always_xy : bool, optional
            Treat ``x`` as easting/longitude and ``y`` as northing/latitude
            regardless of the declared axis order (default: True)

        Returns
        -------
        xr.Dataset or xr.DataArray
            A new object with ``x_out`` and ``y_out`` coordinates added
        """
        if not isinstance(x, str) or not isinstance(y, str):
            raise TypeError(f"x and y must be coordinate names, got {type(x)} and {type(y)}")
        for name in (x, y):
            if name not in self._obj.coords:
                raise ValueError(f"Coordinate '{name}' not found in {type(self._obj).__name__}")

        transformation = self.transformation(source, target, always_xy=always_xy)
        if transformation.math_transform.source_dimension != 2:
            raise ValueError(
                f"transform_coords needs a 2-D source system, "
                f"got {transformation.math_transform.source_dimension} dimensions"
            )

        x_coord, y_coord = self._obj.coords[x], self._obj.coords[y]
        if x_coord.dims != y_coord.dims:
            x_coord, y_coord = xr.broadcast(x_coord, y_coord)
        dims = x_coord.dims
        shape = x_coord.shape

        points = np.column_stack((np.ravel(x_coord.values), np.ravel(y_coord.values)))
        result = transformation.transform(points)
        attrs = {"crs": transformation.target_cs.name}
        return self._obj.assign_coords({
            x_out: (dims, result[:, 0].reshape(shape), attrs),
            y_out: (dims, result[:, 1].reshape(shape), attrs),
        })
