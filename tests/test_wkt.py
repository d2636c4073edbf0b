"""
Tests for reading coordinate systems through pyproj and writing WKT1.
"""

import numpy as np
import pytest
from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError

from conftest import ITM_WKT
from pyreproj import (AxisOrientation, BursaWolfParameters,
                      ConfigurationError, DatumType,
                      GeocentricCoordinateSystem, GeographicCoordinateSystem,
                      ProjectedCoordinateSystem, UnsupportedConversionError,
                      from_pyproj, from_wkt, to_wkt)
from pyreproj.crs.models import FOOT, GRS80


class TestFromWkt:
    """Test parsing WKT into the data model."""

    def test_israeli_grid(self):
        """Test a WKT1 projected system with TOWGS84."""
        itm = from_wkt(ITM_WKT)
        assert isinstance(itm, ProjectedCoordinateSystem)
        assert itm.name == "Israel / Israeli TM Grid"
        assert itm.authority_code == 2039
        assert itm.projection.class_name == "Transverse_Mercator"
        assert itm.projection.get_parameter("central_meridian") == \
            pytest.approx(35.20451694444445, abs=1e-12)
        assert itm.projection.get_parameter("scale_factor") == pytest.approx(1.0000067)
        assert itm.projection.get_parameter("false_northing") == pytest.approx(626907.39)
        assert itm.datum.to_wgs84 == BursaWolfParameters(-48.0, 55.0, 52.0, 0.0, 0.0, 0.0, 0.0)
        assert itm.ellipsoid.same_shape(GRS80)
        assert itm.axes[0].orientation == AxisOrientation.EAST

    def test_invalid_wkt(self):
        """Test that unparsable text raises a configuration error chained to pyproj's."""
        with pytest.raises(ConfigurationError, match="Invalid WKT") as excinfo:
            from_wkt('PROJCS["broken",GEOGCS[')
        assert isinstance(excinfo.value.__cause__, CRSError)

    def test_wkt2(self):
        """Test that WKT2 text is accepted as well."""
        geographic = from_wkt(CRS.from_epsg(4326).to_wkt())
        assert isinstance(geographic, GeographicCoordinateSystem)
        assert geographic.authority_code == 4326


class TestFromPyproj:
    """Test adapting pyproj CRS objects and user input."""

    def test_utm(self):
        """Test WGS 84 / UTM zone 33N from an EPSG code."""
        utm = from_pyproj(32633)
        assert isinstance(utm, ProjectedCoordinateSystem)
        assert utm.authority == "EPSG"
        assert utm.authority_code == 32633
        assert utm.projection.class_name == "Transverse_Mercator"
        assert utm.projection.get_parameter("central_meridian") == pytest.approx(15.0)
        assert utm.projection.get_parameter("scale_factor") == pytest.approx(0.9996)
        assert utm.projection.get_parameter("false_easting") == pytest.approx(500000.0)
        assert utm.datum.datum_type == DatumType.GEOCENTRIC

    def test_geographic_axis_order(self):
        """Test that EPSG:4326 keeps its latitude-first axis order."""
        wgs84 = from_pyproj("EPSG:4326")
        assert isinstance(wgs84, GeographicCoordinateSystem)
        assert wgs84.axes[0].orientation == AxisOrientation.NORTH
        assert wgs84.axes[1].orientation == AxisOrientation.EAST
        assert wgs84.datum.datum_type == DatumType.GEOCENTRIC
        assert wgs84.angular_unit.name == "degree"

    def test_geocentric(self):
        """Test a geocentric system."""
        geocentric = from_pyproj(4978)
        assert isinstance(geocentric, GeocentricCoordinateSystem)
        assert geocentric.linear_unit.metres_per_unit == 1.0
        assert geocentric.authority_code == 4978

    def test_vertical_is_unsupported(self):
        """Test that vertical systems are rejected."""
        with pytest.raises(UnsupportedConversionError):
            from_pyproj(5703)

    def test_invalid_user_input(self):
        """Test that unknown codes are configuration errors."""
        with pytest.raises(ConfigurationError):
            from_pyproj("EPSG:0")

    def test_pseudo_mercator_method(self):
        """Test that the web mercator method is mapped to its projection."""
        web = from_pyproj(3857)
        assert web.projection.class_name == "Popular_Visualisation Pseudo-Mercator"

    def test_pseudo_mercator_end_to_end(self, factory):
        """Test WGS 84 to web mercator, both read from EPSG codes."""
        transformation = factory.create_from_coordinate_systems(
            from_pyproj(4326), from_pyproj(3857), always_xy=True)
        oracle = Transformer.from_crs(4326, 3857, always_xy=True)
        lon = np.array([13.4, -74.0, 151.2])
        lat = np.array([52.5, 40.7, -33.9])
        expected = np.column_stack(oracle.transform(lon, lat))
        result = transformation.transform(np.column_stack((lon, lat)))
        np.testing.assert_allclose(result, expected, atol=1e-3)

    def test_oblique_stereographic_end_to_end(self, factory):
        """Test Amersfoort / RD New read from pyproj against pyproj itself."""
        source = from_pyproj(4289)
        target = from_pyproj(28992)
        assert target.projection.class_name == "Oblique_Stereographic"
        transformation = factory.create_from_coordinate_systems(source, target, always_xy=True)
        oracle = Transformer.from_crs(4289, 28992, always_xy=True)
        lon = np.array([4.9, 6.57, 3.6])
        lat = np.array([52.37, 53.22, 51.44])
        expected = np.column_stack(oracle.transform(lon, lat))
        result = transformation.transform(np.column_stack((lon, lat)))
        np.testing.assert_allclose(result, expected, atol=1e-3)


class TestToWkt:
    """Test writing WKT1."""

    def test_geographic(self, wgs84):
        """Test the WKT1 of WGS 84."""
        wkt = to_wkt(wgs84)
        assert wkt.startswith('GEOGCS["WGS 84",DATUM["WGS_1984",SPHEROID["WGS 84",6378137,')
        assert 'AXIS["Lon",EAST],AXIS["Lat",NORTH]' in wkt
        assert wkt.endswith('AUTHORITY["EPSG","4326"]]')
        assert wgs84.wkt == wkt

    def test_projected_round_trip(self, itm):
        """Test that written WKT parses back to the same projection and datum."""
        wkt = to_wkt(itm)
        assert wkt.startswith('PROJCS["Israeli TM Grid"')
        assert "TOWGS84[-48,55,52,0,0,0,0]" in wkt
        parsed = from_wkt(wkt)
        assert parsed.projection.class_name == "Transverse_Mercator"
        for parameter in itm.projection.parameters:
            assert parsed.projection.get_parameter(parameter.name) == \
                pytest.approx(parameter.value, abs=1e-9)
        assert parsed.datum.to_wgs84 == itm.datum.to_wgs84
        assert parsed.ellipsoid.same_shape(itm.ellipsoid)

    def test_round_trip_transforms_identically(self, factory, wgs84, itm):
        """Test that the parsed copy transforms like the original."""
        parsed = from_wkt(to_wkt(itm))
        point = [35.2, 31.7]
        expected = factory.create_from_coordinate_systems(wgs84, itm).transform(point)
        result = factory.create_from_coordinate_systems(wgs84, parsed, always_xy=True)
        np.testing.assert_allclose(result.transform(point), expected, atol=1e-6)

    def test_linear_unit_round_trip(self):
        """Test that a foot-based projected system keeps its unit."""
        utm = ProjectedCoordinateSystem.wgs84_utm(33)
        in_feet = ProjectedCoordinateSystem("UTM 33N feet", utm.geographic_cs, utm.projection,
                                            linear_unit=FOOT)
        assert 'UNIT["foot",0.3048]' in to_wkt(in_feet)
        assert 'PARAMETER["false_easting",1640419.94750656' in to_wkt(in_feet)
        parsed = from_wkt(to_wkt(in_feet))
        assert parsed.linear_unit.metres_per_unit == pytest.approx(0.3048)
        assert parsed.projection.get_parameter("false_easting") == pytest.approx(500000.0)

    def test_geocentric(self):
        """Test that GEOCCS output parses back to a geocentric system."""
        wkt = to_wkt(GeocentricCoordinateSystem.wgs84())
        assert wkt.startswith('GEOCCS["WGS 84"')
        assert isinstance(from_wkt(wkt), GeocentricCoordinateSystem)

    def test_geocentric_axes_are_other(self):
        """Test that only the Z axis of a geocentric system carries a direction."""
        wkt = to_wkt(GeocentricCoordinateSystem.wgs84())
        assert 'AXIS["Geocentric X",OTHER],AXIS["Geocentric Y",OTHER],' \
               'AXIS["Geocentric Z",NORTH]' in wkt

    def test_geocentric_with_east_axis(self):
        """Test that a GEOCCS declaring Y as EAST is still read as geocentric."""
        wkt = to_wkt(GeocentricCoordinateSystem.wgs84()).replace(
            'AXIS["Geocentric Y",OTHER]', 'AXIS["Geocentric Y",EAST]')
        geocentric = from_wkt(wkt)
        assert isinstance(geocentric, GeocentricCoordinateSystem)
        assert geocentric.ellipsoid.same_shape(GeocentricCoordinateSystem.wgs84().ellipsoid)
