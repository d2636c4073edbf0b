"""
Tests for the map projections.

Forward projections are compared with PROJ (through pyproj) and every
projection is checked for round trips.
"""

import numpy as np
import pytest
from pyproj import Proj

from conftest import with_wgs84_axes
from pyreproj import ConfigurationError, NumericDomainError
from pyreproj.crs.models import BESSEL_1841, CLARKE_1866, GRS80
from pyreproj.projections import (AlbersEqualArea, CassiniSoldnerProjection,
                                  HotineObliqueMercatorProjection,
                                  KrovakProjection, LambertConformalConic2SP,
                                  MapProjection, Mercator,
                                  ObliqueMercatorProjection,
                                  ObliqueStereographicProjection,
                                  PolyconicProjection, PseudoMercator,
                                  TransverseMercator)


def _axes(ellipsoid):
    return {"semi_major": ellipsoid.semi_major_axis, "semi_minor": ellipsoid.semi_minor_axis}


def _project(projection, lon, lat):
    points = np.column_stack((np.radians(lon), np.radians(lat)))
    return projection.transform(points)


def _round_trip(projection, lon, lat):
    points = np.column_stack((np.radians(lon), np.radians(lat)))
    return points, projection.inverse().transform(projection.transform(points))


TM_PARAMETERS = with_wgs84_axes({
    "latitude_of_origin": 0.0,
    "central_meridian": 9.0,
    "scale_factor": 0.9996,
    "false_easting": 500000.0,
})

LCC_PARAMETERS = dict(_axes(CLARKE_1866), **{
    "latitude_of_origin": 33.0,
    "central_meridian": -96.0,
    "standard_parallel_1": 33.0,
    "standard_parallel_2": 45.0,
    "false_easting": 1000000.0,
    "false_northing": 200000.0,
})

ALBERS_PARAMETERS = dict(_axes(GRS80), **{
    "latitude_of_center": 23.0,
    "longitude_of_center": -96.0,
    "standard_parallel_1": 29.5,
    "standard_parallel_2": 45.5,
    "false_easting": 0.0,
    "false_northing": 0.0,
})

RD_PARAMETERS = dict(_axes(BESSEL_1841), **{
    "latitude_of_origin": 52.15616055555555,
    "central_meridian": 5.38763888888889,
    "scale_factor": 0.9999079,
    "false_easting": 155000.0,
    "false_northing": 463000.0,
})

OMERC_PARAMETERS = dict(_axes(GRS80), **{
    "latitude_of_center": 4.0,
    "longitude_of_center": 115.0,
    "azimuth": 53.31582047222222,
    "rectified_grid_angle": 53.13010236111111,
    "scale_factor": 0.99984,
    "false_easting": 590476.87,
    "false_northing": 442857.65,
})

KROVAK_PARAMETERS = dict(_axes(BESSEL_1841), **{
    "latitude_of_center": 49.5,
    "longitude_of_center": 24.0 + 50.0 / 60.0,
    "scale_factor": 0.9999,
})


class TestAgainstProj:
    """Compare forward projections with PROJ."""

    def test_transverse_mercator(self):
        """Test Transverse Mercator against +proj=tmerc across a UTM zone."""
        lon = np.array([9.0, 6.5, 11.9, 8.0, 10.0])
        lat = np.array([0.0, 47.3, 55.0, -33.0, 80.0])
        proj = Proj("+proj=tmerc +lat_0=0 +lon_0=9 +k=0.9996 +x_0=500000 +y_0=0 +ellps=WGS84")
        expected = np.column_stack(proj(lon, lat))
        result = _project(TransverseMercator(TM_PARAMETERS), lon, lat)
        np.testing.assert_allclose(result, expected, atol=1e-3)

    def test_transverse_mercator_with_origin_latitude(self):
        """Test a non-zero latitude of origin (Israeli TM Grid)."""
        parameters = dict(_axes(GRS80), **{
            "latitude_of_origin": 31.734393611111109,
            "central_meridian": 35.204516944444442,
            "scale_factor": 1.0000067,
            "false_easting": 219529.584,
            "false_northing": 626907.390,
        })
        proj = Proj("+proj=tmerc +lat_0=31.734393611111109 +lon_0=35.204516944444442 "
                    "+k=1.0000067 +x_0=219529.584 +y_0=626907.39 +ellps=GRS80")
        lon = np.array([35.2, 34.8, 35.5])
        lat = np.array([31.7, 32.1, 30.0])
        expected = np.column_stack(proj(lon, lat))
        np.testing.assert_allclose(_project(TransverseMercator(parameters), lon, lat),
                                   expected, atol=1e-3)

    def test_mercator(self):
        """Test ellipsoidal Mercator (1SP) against +proj=merc."""
        parameters = with_wgs84_axes({"central_meridian": 10.0, "scale_factor": 0.997,
                                      "false_easting": 100.0})
        proj = Proj("+proj=merc +lon_0=10 +k=0.997 +x_0=100 +ellps=WGS84")
        lon = np.array([-160.0, 0.0, 10.0, 120.0])
        lat = np.array([-80.0, 0.0, 45.0, 85.0])
        expected = np.column_stack(proj(lon, lat))
        np.testing.assert_allclose(_project(Mercator(parameters), lon, lat), expected, atol=1e-3)

    def test_mercator_2sp(self):
        """Test that a standard parallel sets the scale factor."""
        parameters = with_wgs84_axes({"central_meridian": 0.0, "standard_parallel_1": 41.0})
        proj = Proj("+proj=merc +lon_0=0 +lat_ts=41 +ellps=WGS84")
        lon = np.array([5.0, -20.0])
        lat = np.array([40.0, -10.0])
        expected = np.column_stack(proj(lon, lat))
        mercator = Mercator(parameters)
        assert mercator.projection_name == "Mercator_2SP"
        np.testing.assert_allclose(_project(mercator, lon, lat), expected, atol=1e-3)

    def test_pseudo_mercator(self):
        """Test web mercator against EPSG:3857's PROJ definition."""
        proj = Proj("+proj=merc +a=6378137 +b=6378137 +lat_ts=0 +lon_0=0 +x_0=0 +y_0=0 +k=1")
        lon = np.array([-179.0, 0.0, 13.4])
        lat = np.array([-85.0, 0.0, 52.5])
        expected = np.column_stack(proj(lon, lat))
        result = _project(PseudoMercator(with_wgs84_axes({})), lon, lat)
        np.testing.assert_allclose(result, expected, atol=1e-3)

    def test_lambert_conformal_conic(self):
        """Test LCC 2SP against +proj=lcc."""
        proj = Proj("+proj=lcc +lat_0=33 +lon_0=-96 +lat_1=33 +lat_2=45 "
                    "+x_0=1000000 +y_0=200000 +ellps=clrk66")
        lon = np.array([-96.0, -75.0, -120.0, -100.0])
        lat = np.array([33.0, 40.0, 48.0, 20.0])
        expected = np.column_stack(proj(lon, lat))
        np.testing.assert_allclose(_project(LambertConformalConic2SP(LCC_PARAMETERS), lon, lat),
                                   expected, atol=1e-3)

    def test_albers(self):
        """Test Albers Equal Area against +proj=aea."""
        proj = Proj("+proj=aea +lat_0=23 +lon_0=-96 +lat_1=29.5 +lat_2=45.5 "
                    "+x_0=0 +y_0=0 +ellps=GRS80")
        lon = np.array([-96.0, -77.0, -122.0, -90.0])
        lat = np.array([23.0, 39.0, 47.6, 60.0])
        expected = np.column_stack(proj(lon, lat))
        np.testing.assert_allclose(_project(AlbersEqualArea(ALBERS_PARAMETERS), lon, lat),
                                   expected, atol=1e-3)

    def test_polyconic(self):
        """Test American Polyconic against +proj=poly."""
        parameters = dict(_axes(CLARKE_1866), latitude_of_origin=30.0, central_meridian=-96.0)
        proj = Proj("+proj=poly +lat_0=30 +lon_0=-96 +x_0=0 +y_0=0 +ellps=clrk66")
        lon = np.array([-96.0, -90.0, -100.0, -93.0])
        lat = np.array([30.0, 40.0, 25.0, 0.0])
        expected = np.column_stack(proj(lon, lat))
        np.testing.assert_allclose(_project(PolyconicProjection(parameters), lon, lat),
                                   expected, atol=1e-2)

    def test_cassini(self):
        """Test Cassini-Soldner against +proj=cass near the central meridian."""
        parameters = dict(_axes(CLARKE_1866), latitude_of_origin=10.441666666666666,
                          central_meridian=-61.33333333333334,
                          false_easting=86501.46392052, false_northing=65379.0134283)
        proj = Proj("+proj=cass +lat_0=10.441666666666666 +lon_0=-61.33333333333334 "
                    "+x_0=86501.46392052 +y_0=65379.0134283 +ellps=clrk66")
        lon = np.array([-61.33333333333334, -61.0, -61.8])
        lat = np.array([10.441666666666666, 10.0, 11.0])
        expected = np.column_stack(proj(lon, lat))
        np.testing.assert_allclose(_project(CassiniSoldnerProjection(parameters), lon, lat),
                                   expected, atol=1e-2)

    def test_oblique_stereographic(self):
        """Test the Dutch RD New grid against +proj=sterea."""
        proj = Proj("+proj=sterea +lat_0=52.15616055555555 +lon_0=5.38763888888889 "
                    "+k=0.9999079 +x_0=155000 +y_0=463000 +ellps=bessel")
        lon = np.array([5.38763888888889, 4.9, 6.6, 3.5])
        lat = np.array([52.15616055555555, 52.37, 53.2, 51.4])
        expected = np.column_stack(proj(lon, lat))
        result = _project(ObliqueStereographicProjection(RD_PARAMETERS), lon, lat)
        np.testing.assert_allclose(result, expected, atol=1e-3)
        np.testing.assert_allclose(result[0], [155000.0, 463000.0], atol=1e-4)

    def test_hotine_variant_b(self):
        """Test Oblique Mercator (variant B) against +proj=omerc."""
        proj = Proj("+proj=omerc +lat_0=4 +lonc=115 +alpha=53.31582047222222 "
                    "+gamma=53.13010236111111 +k=0.99984 +x_0=590476.87 +y_0=442857.65 "
                    "+ellps=GRS80")
        lon = np.array([115.0, 114.0, 117.5])
        lat = np.array([4.0, 3.0, 6.0])
        expected = np.column_stack(proj(lon, lat))
        result = _project(ObliqueMercatorProjection(OMERC_PARAMETERS), lon, lat)
        np.testing.assert_allclose(result, expected, atol=1e-3)
        np.testing.assert_allclose(result[0], [590476.87, 442857.65], atol=1e-4)

    def test_hotine_variant_a(self):
        """Test Hotine Oblique Mercator (variant A) against +proj=omerc +no_uoff."""
        proj = Proj("+proj=omerc +no_uoff +lat_0=4 +lonc=115 +alpha=53.31582047222222 "
                    "+gamma=53.13010236111111 +k=0.99984 +x_0=0 +y_0=0 +ellps=GRS80")
        parameters = dict(OMERC_PARAMETERS, false_easting=0.0, false_northing=0.0)
        lon = np.array([115.0, 114.0, 117.5])
        lat = np.array([4.0, 3.0, 6.0])
        expected = np.column_stack(proj(lon, lat))
        result = _project(HotineObliqueMercatorProjection(parameters), lon, lat)
        np.testing.assert_allclose(result, expected, atol=1e-3)

    def test_krovak(self):
        """Test Krovak against +proj=krovak with the S-JTSK defaults."""
        proj = Proj("+proj=krovak +lat_0=49.5 +lon_0=24.83333333333333 +k=0.9999 "
                    "+x_0=0 +y_0=0 +ellps=bessel")
        lon = np.array([14.42, 16.6, 18.3])
        lat = np.array([50.08, 49.2, 49.8])
        expected = np.column_stack(proj(lon, lat))
        result = _project(KrovakProjection(KROVAK_PARAMETERS), lon, lat)
        np.testing.assert_allclose(result, expected, atol=1e-3)
        assert np.all(result < 0)


ROUND_TRIP_CASES = [
    (TransverseMercator, TM_PARAMETERS, [9.0, 6.0, 12.0, 9.5], [0.0, 45.0, -60.0, 84.0]),
    (Mercator, with_wgs84_axes({}), [-179.0, 0.0, 45.0], [-84.0, 0.0, 60.0]),
    (PseudoMercator, with_wgs84_axes({}), [-179.0, 0.0, 45.0], [-84.0, 0.0, 60.0]),
    (LambertConformalConic2SP, LCC_PARAMETERS, [-96.0, -70.0, -125.0], [33.0, 50.0, 20.0]),
    (AlbersEqualArea, ALBERS_PARAMETERS, [-96.0, -70.0, -125.0], [23.0, 50.0, 30.0]),
    (KrovakProjection, KROVAK_PARAMETERS, [12.5, 15.0, 22.0], [48.6, 50.0, 51.0]),
    (PolyconicProjection, dict(_axes(CLARKE_1866), central_meridian=-96.0),
     [-96.0, -90.0, -105.0, -95.0], [30.0, 45.0, 10.0, 0.0]),
    (CassiniSoldnerProjection, dict(_axes(CLARKE_1866), central_meridian=-61.3,
                                     latitude_of_origin=10.4),
     [-61.3, -61.0, -62.5], [10.4, 9.0, 12.0]),
    (HotineObliqueMercatorProjection, OMERC_PARAMETERS, [115.0, 112.0, 118.0], [4.0, 1.0, 7.0]),
    (ObliqueMercatorProjection, OMERC_PARAMETERS, [115.0, 112.0, 118.0], [4.0, 1.0, 7.0]),
    (ObliqueStereographicProjection, RD_PARAMETERS, [5.4, 3.3, 7.2], [52.2, 50.7, 53.6]),
]


class TestRoundTrip:
    """Test that inverse(forward(p)) recovers p."""

    @pytest.mark.parametrize("projection_class, parameters, lon, lat", ROUND_TRIP_CASES,
                             ids=[case[0].__name__ for case in ROUND_TRIP_CASES])
    def test_round_trip(self, projection_class, parameters, lon, lat):
        """Test round trips to 1e-9 radians."""
        projection = projection_class(parameters)
        points, back = _round_trip(projection, lon, lat)
        np.testing.assert_allclose(back, points, atol=1e-9)

    def test_inverse_round_trip_in_metres(self):
        """Test forward(inverse(p)) for projected points to well below a millimetre."""
        projection = CassiniSoldnerProjection(dict(_axes(CLARKE_1866), central_meridian=-61.3))
        points = np.array([[10000.0, 1100000.0], [-80000.0, 1300000.0]])
        back = projection.transform(projection.inverse().transform(points))
        np.testing.assert_allclose(back, points, atol=1e-4)

    def test_height_passes_through(self):
        """Test that a third ordinate is carried unchanged."""
        projection = TransverseMercator(TM_PARAMETERS, dimension=3)
        result = projection.transform([np.radians(9.5), np.radians(45.0), 123.4])
        assert result[2] == 123.4
        assert projection.inverse().transform(result)[2] == 123.4


class TestDomainAndConfiguration:
    """Test configuration errors and numeric domain errors."""

    def test_base_class_is_abstract(self):
        """Test that a projection without forward and inverse formulas cannot be built."""
        with pytest.raises(TypeError):
            MapProjection(with_wgs84_axes({}))

    def test_missing_required_parameter(self):
        """Test that Albers needs both standard parallels."""
        parameters = dict(ALBERS_PARAMETERS)
        del parameters["standard_parallel_2"]
        with pytest.raises(ConfigurationError, match="standard_parallel_2"):
            AlbersEqualArea(parameters)

    def test_missing_ellipsoid(self):
        """Test that semi_major and semi_minor are required."""
        with pytest.raises(ConfigurationError, match="semi_major"):
            TransverseMercator({"central_meridian": 3.0})

    def test_eccentricity_out_of_range(self):
        """Test that a semi-minor axis larger than the semi-major axis is rejected."""
        with pytest.raises(ConfigurationError):
            TransverseMercator({"semi_major": 1.0, "semi_minor": 2.0})

    def test_non_positive_scale_factor(self):
        """Test that the scale factor must be positive."""
        with pytest.raises(ConfigurationError, match="scale factor"):
            TransverseMercator(with_wgs84_axes({"scale_factor": 0.0}))

    @pytest.mark.parametrize("projection_class",
                             [AlbersEqualArea, LambertConformalConic2SP])
    def test_symmetric_standard_parallels(self, projection_class):
        """Test that standard parallels symmetric about the equator are rejected."""
        parameters = with_wgs84_axes({"standard_parallel_1": 30.0,
                                      "standard_parallel_2": -30.0})
        with pytest.raises(ConfigurationError, match="symmetric"):
            projection_class(parameters)

    def test_oblique_stereographic_polar_origin(self):
        """Test that a polar origin is rejected for the oblique stereographic."""
        with pytest.raises(ConfigurationError):
            ObliqueStereographicProjection(with_wgs84_axes({"latitude_of_origin": 90.0}))

    def test_hotine_requires_azimuth(self):
        """Test that the Hotine projections need an azimuth."""
        parameters = dict(OMERC_PARAMETERS)
        del parameters["azimuth"]
        with pytest.raises(ConfigurationError, match="azimuth"):
            HotineObliqueMercatorProjection(parameters)

    def test_mercator_pole(self):
        """Test that projecting a pole is a numeric domain error."""
        mercator = Mercator(with_wgs84_axes({}))
        with pytest.raises(NumericDomainError, match="first at index 1"):
            _project(mercator, [0.0, 0.0], [10.0, 90.0])
        # the transform stays usable
        assert np.all(np.isfinite(_project(mercator, [0.0], [10.0])))

    def test_lambert_opposite_pole(self):
        """Test that the pole opposite the cone apex is a numeric domain error."""
        with pytest.raises(NumericDomainError):
            _project(LambertConformalConic2SP(LCC_PARAMETERS), [-96.0], [-90.0])

    def test_transverse_mercator_singularity(self):
        """Test that points 90 degrees from the central meridian on the equator fail."""
        with pytest.raises(NumericDomainError):
            _project(TransverseMercator(TM_PARAMETERS), [99.0], [0.0])

    def test_stereographic_antipode(self):
        """Test that the antipode of the origin cannot be projected."""
        parameters = {"semi_major": 6371000.0, "semi_minor": 6371000.0,
                      "latitude_of_origin": 52.0, "central_meridian": 5.0}
        projection = ObliqueStereographicProjection(parameters)
        with pytest.raises(NumericDomainError, match="antipode"):
            _project(projection, [-175.0], [-52.0])

    def test_nan_input_propagates(self):
        """Test that NaN coordinates give NaN results rather than errors."""
        projection = TransverseMercator(TM_PARAMETERS)
        result = projection.inverse().transform([[np.nan, np.nan], [500000.0, 0.0]])
        assert np.all(np.isnan(result[0]))
        np.testing.assert_allclose(result[1], [np.radians(9.0), 0.0], atol=1e-12)
