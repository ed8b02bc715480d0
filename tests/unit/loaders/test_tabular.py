# =============================================================================
# Unit Tests: Tabular Loaders
# =============================================================================

import io

import pandas as pd
import pytest

from geoupload.errors import LoaderError
from geoupload.loaders.tabular import read_csv_rows, read_excel_rows
from geoupload.normalization import normalize


# =============================================================================
# Test: CSV
# =============================================================================


def test_read_csv_rows_keys_and_types(csv_bytes):
    """Header row becomes keys; numeric columns are inferred."""
    rows = read_csv_rows(csv_bytes, "rows.csv")

    assert list(rows[0].keys()) == ["name", "latitude", "longitude", "geometry", "coordinates"]
    assert rows[0]["latitude"] == pytest.approx(-1.2921)
    assert rows[0]["geometry"] is None


def test_read_csv_rows_quoted_coordinates(csv_bytes):
    """A quoted coordinates cell stays one string."""
    rows = read_csv_rows(csv_bytes, "rows.csv")

    assert rows[1]["coordinates"] == "36.8,-1.3,0,36.9,-1.3,0,36.9,-1.2,0"


def test_csv_rows_normalize_to_polygon(csv_bytes):
    result = normalize(read_csv_rows(csv_bytes, "rows.csv"), "CSV")

    types = [f.geometry.type for f in result.collection.features]
    assert types == ["Point", "Polygon"]


def test_read_csv_rows_header_only():
    assert read_csv_rows(b"name,latitude,longitude\n") == []


def test_read_csv_rows_empty_file_raises():
    with pytest.raises(LoaderError, match="Failed to parse CSV"):
        read_csv_rows(b"", "empty.csv")


def test_read_csv_rows_ragged_rows_raise():
    with pytest.raises(LoaderError):
        read_csv_rows(b"a,b\n1,2,3\n", "ragged.csv")


# =============================================================================
# Test: Excel
# =============================================================================


def test_read_excel_rows(excel_bytes):
    rows = read_excel_rows(excel_bytes, "rows.xlsx")

    assert len(rows) == 2
    assert rows[1] == {"name": "Mombasa", "latitude": -4.0435, "longitude": 39.6682}


def test_excel_rows_normalize_to_points(excel_bytes):
    result = normalize(read_excel_rows(excel_bytes), "Excel")

    assert [f.geometry.coordinates for f in result.collection.features] == [
        [36.8219, -1.2921],
        [39.6682, -4.0435],
    ]


def test_read_excel_rows_missing_cells_are_none():
    frame = pd.DataFrame({"name": ["a", None], "latitude": [1.0, None]})
    buffer = io.BytesIO()
    frame.to_excel(buffer, index=False, engine="openpyxl")

    rows = read_excel_rows(buffer.getvalue())

    assert rows[1] == {"name": None, "latitude": None}


def test_read_excel_rows_invalid_bytes_raise():
    with pytest.raises(LoaderError, match="Failed to parse Excel"):
        read_excel_rows(b"not a workbook", "bad.xlsx")
