"""
Shared pytest fixtures for geoupload tests.

Provides reusable rows, documents and file bytes to avoid duplication
across test files.
"""

import io
import json

import pandas as pd
import pytest

from geoupload.models import Feature, FeatureCollection, Point, get_settings


# =============================================================================
# Settings
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Point settings at a temporary services store and reset the cache."""
    monkeypatch.setenv("GEOUPLOAD_SERVICES_STORE_PATH", str(tmp_path / "services.json"))
    monkeypatch.delenv("GEOUPLOAD_DEFAULT_SOURCE_CRS", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Tabular Row Fixtures
# =============================================================================

@pytest.fixture
def point_row():
    """Row with in-range latitude/longitude columns."""
    return {"name": "Nairobi", "latitude": -1.2921, "longitude": 36.8219}


@pytest.fixture
def polygon_row():
    """Row with a flattened (lng, lat, z) coordinates string."""
    return {
        "name": "Block A",
        "geometry": "Polygon",
        "coordinates": "36.8,-1.3,0,36.9,-1.3,0,36.9,-1.2,0,36.8,-1.3,0",
    }


@pytest.fixture
def multipolygon_row():
    """Row with a MultiPolygon geometry and a coordinates list."""
    return {
        "name": "Block B",
        "geometry": "MultiPolygon",
        "coordinates": [10, 20, 0, 11, 20, 0, 11, 21, 0, 10, 20, 0],
    }


# =============================================================================
# Document Fixtures
# =============================================================================

@pytest.fixture
def sample_collection():
    """Two-point FeatureCollection."""
    return FeatureCollection(
        features=[
            Feature(geometry=Point(coordinates=[36.8, -1.3]), properties={"name": "A"}),
            Feature(geometry=Point(coordinates=[37.0, -1.0]), properties={"name": "B"}),
        ]
    )


@pytest.fixture
def geojson_bytes(sample_collection):
    """Encoded GeoJSON FeatureCollection."""
    return json.dumps(sample_collection.to_geojson()).encode("utf-8")


@pytest.fixture
def kml_bytes():
    """KML document with a point, a polygon and a geometry-less placemark."""
    return b"""<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <Folder>
      <Placemark>
        <name>Well</name>
        <description>Borehole</description>
        <ExtendedData>
          <Data name="depth"><value>40</value></Data>
        </ExtendedData>
        <Point><coordinates>36.8,-1.3,0</coordinates></Point>
      </Placemark>
      <Placemark>
        <name>Farm</name>
        <Polygon>
          <outerBoundaryIs>
            <LinearRing>
              <coordinates>
                36.8,-1.3,0 36.9,-1.3,0 36.9,-1.2,0 36.8,-1.3,0
              </coordinates>
            </LinearRing>
          </outerBoundaryIs>
        </Polygon>
      </Placemark>
      <Placemark>
        <name>Note</name>
      </Placemark>
    </Folder>
  </Document>
</kml>
"""


@pytest.fixture
def csv_bytes():
    """CSV with one point row, one polygon row and one row without geometry."""
    return (
        b"name,latitude,longitude,geometry,coordinates\n"
        b"Nairobi,-1.2921,36.8219,,\n"
        b'Block A,,,Polygon,"36.8,-1.3,0,36.9,-1.3,0,36.9,-1.2,0"\n'
        b"Nowhere,,,,\n"
    )


@pytest.fixture
def excel_bytes():
    """Single-sheet .xlsx workbook with two point rows."""
    frame = pd.DataFrame(
        {
            "name": ["Nairobi", "Mombasa"],
            "latitude": [-1.2921, -4.0435],
            "longitude": [36.8219, 39.6682],
        }
    )
    buffer = io.BytesIO()
    frame.to_excel(buffer, index=False, engine="openpyxl")
    return buffer.getvalue()
