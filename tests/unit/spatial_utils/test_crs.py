"""
Unit tests for CRS reprojection.

Uses real pyproj transforms; no network access is required.
"""

import pytest

from geoupload.models import Feature, FeatureCollection, GeometryCollection, Point, Polygon
from geoupload.spatial_utils.crs import build_transformer, reproject


@pytest.fixture
def mercator_collection():
    """Web Mercator collection with an origin point and a small polygon."""
    return FeatureCollection(
        features=[
            Feature(geometry=Point(coordinates=[0.0, 0.0]), properties={"name": "origin"}),
            Feature(
                geometry=Polygon(
                    coordinates=[[[0.0, 0.0], [111319.49, 0.0], [111319.49, 111325.14], [0.0, 0.0]]]
                ),
                properties={"name": "square"},
            ),
            Feature(geometry=None, properties={"name": "empty"}),
        ]
    )


class TestReproject:
    """Test reprojection to EPSG:4326."""

    def test_web_mercator_origin(self, mercator_collection):
        result = reproject(mercator_collection, "EPSG:3857")

        lng, lat = result.features[0].geometry.coordinates
        assert lng == pytest.approx(0.0, abs=1e-9)
        assert lat == pytest.approx(0.0, abs=1e-9)

    def test_polygon_transformed(self, mercator_collection):
        result = reproject(mercator_collection, "EPSG:3857")

        ring = result.features[1].geometry.coordinates[0]
        assert ring[1][0] == pytest.approx(1.0, abs=1e-4)
        assert ring[2][1] == pytest.approx(1.0, abs=1e-3)

    def test_properties_and_null_geometry_kept(self, mercator_collection):
        result = reproject(mercator_collection, "EPSG:3857")

        assert [f.properties["name"] for f in result.features] == ["origin", "square", "empty"]
        assert result.features[2].geometry is None

    def test_input_not_modified(self, mercator_collection):
        before = mercator_collection.to_geojson()
        reproject(mercator_collection, "EPSG:3857")

        assert mercator_collection.to_geojson() == before

    def test_wgs84_is_noop(self, sample_collection):
        assert reproject(sample_collection, "epsg:4326") is sample_collection

    def test_utm_zone(self):
        """UTM 37S easting/northing near Nairobi lands in Kenya."""
        collection = FeatureCollection(
            features=[Feature(geometry=Point(coordinates=[257000.0, 9857000.0]))]
        )
        result = reproject(collection, "EPSG:32737")

        lng, lat = result.features[0].geometry.coordinates
        assert 36 < lng < 37.5
        assert -2 < lat < -1

    def test_geometry_collection(self):
        collection = FeatureCollection(
            features=[
                Feature(
                    geometry=GeometryCollection(
                        geometries=[Point(coordinates=[0.0, 0.0]), Point(coordinates=[0.0, 0.0])]
                    )
                )
            ]
        )
        result = reproject(collection, "EPSG:3857")

        assert len(result.features[0].geometry.geometries) == 2

    def test_invalid_crs_fails_open(self, sample_collection, caplog):
        result = reproject(sample_collection, "not-a-crs")

        assert result is sample_collection
        assert "Error transforming CRS" in caplog.text

    def test_unknown_epsg_fails_open(self, sample_collection):
        assert reproject(sample_collection, "EPSG:999999") is sample_collection


def test_build_transformer_axis_order():
    """Output is (lng, lat) regardless of the authority axis order."""
    transformer = build_transformer("EPSG:3857")
    lng, lat = transformer.transform(111319.49, 0.0)

    assert lng == pytest.approx(1.0, abs=1e-4)
    assert lat == pytest.approx(0.0, abs=1e-9)
