"""
Test fixtures for PyReproj library.

This module contains shared coordinate systems and sample points used
throughout the test suite.
"""

import numpy as np
import pytest
import xarray as xr

from pyreproj import (BursaWolfParameters, CoordinateTransformationFactory,
                      DatumType, GeographicCoordinateSystem, HorizontalDatum,
                      ProjectedCoordinateSystem, Projection,
                      ProjectionParameter)
from pyreproj.crs.models import GRS80, WGS84

# Israeli TM Grid, as published with EPSG:2039
ITM_WKT = (
    'PROJCS["Israel / Israeli TM Grid",GEOGCS["Israel",DATUM["Israel",'
    'SPHEROID["GRS 1980",6378137,298.257222101,AUTHORITY["EPSG","7019"]],'
    'TOWGS84[-48,55,52,0,0,0,0],AUTHORITY["EPSG","6141"]],'
    'PRIMEM["Greenwich",0,AUTHORITY["EPSG","8901"]],'
    'UNIT["degree",0.01745329251994328,AUTHORITY["EPSG","9122"]],'
    'AUTHORITY["EPSG","4141"]],UNIT["metre",1,AUTHORITY["EPSG","9001"]],'
    'PROJECTION["Transverse_Mercator"],'
    'PARAMETER["latitude_of_origin",31.73439361111111],'
    'PARAMETER["central_meridian",35.20451694444445],'
    'PARAMETER["scale_factor",1.0000067],'
    'PARAMETER["false_easting",219529.584],'
    'PARAMETER["false_northing",626907.39],'
    'AUTHORITY["EPSG","2039"],AXIS["Easting",EAST],AXIS["Northing",NORTH]]'
)

WGS84_ESRI_WKT = (
    'GEOGCS["GCS_WGS_1984",DATUM["D_WGS_1984",'
    'SPHEROID["WGS_1984",6378137,298.257223563]],'
    'PRIMEM["Greenwich",0],UNIT["Degree",0.0174532925199433]]'
)

# Jerusalem, with its published Israeli TM Grid coordinates
JERUSALEM_LONLAT = (35.234383488170444, 31.776747919252124)
JERUSALEM_ITM = (222286.0, 631556.0)

WGS84_PARAMETERS = {
    "semi_major": WGS84.semi_major_axis,
    "semi_minor": WGS84.semi_minor_axis,
}


@pytest.fixture
def factory():
    """A fresh transformation factory with an empty cache."""
    return CoordinateTransformationFactory()


@pytest.fixture
def wgs84():
    """WGS 84 geographic coordinate system in lon/lat order."""
    return GeographicCoordinateSystem.wgs84()


@pytest.fixture
def israel_datum():
    """The Israel 1993 datum on GRS 80 with its 3-parameter shift to WGS 84."""
    return HorizontalDatum(
        "Isreal 1993",
        GRS80,
        BursaWolfParameters(-48.0, 55.0, 52.0, 0.0, 0.0, 0.0, 0.0),
        DatumType.CLASSIC,
    )


@pytest.fixture
def itm(israel_datum):
    """Israeli TM Grid built from explicit parameters."""
    geographic = GeographicCoordinateSystem("Isreal 1993", datum=israel_datum)
    projection = Projection(
        "Transverse_Mercator",
        "Transverse_Mercator",
        (
            ProjectionParameter("latitude_of_origin", 31.734393611111109),
            ProjectionParameter("central_meridian", 35.204516944444442),
            ProjectionParameter("false_northing", 626907.390),
            ProjectionParameter("false_easting", 219529.584),
            ProjectionParameter("scale_factor", 1.0000067),
        ),
    )
    return ProjectedCoordinateSystem("Israeli TM Grid", geographic, projection)


@pytest.fixture
def lonlat_grid():
    """A small lon/lat dataset around the central meridian of UTM zone 32."""
    lon = np.linspace(7.0, 11.0, 5)
    lat = np.linspace(46.0, 49.0, 4)
    data = np.arange(20, dtype=float).reshape(4, 5)
    return xr.Dataset(
        {'temperature': (['lat', 'lon'], data)},
        coords={'lon': lon, 'lat': lat},
    )


def with_wgs84_axes(parameters):
    """Projection parameters plus the WGS 84 semi-axes."""
    merged = dict(WGS84_PARAMETERS)
    merged.update(parameters)
    return merged
