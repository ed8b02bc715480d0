"""
Unit tests for the file type dispatcher.
"""

import pytest

from geoupload.errors import LoaderError
from geoupload.loaders import detect_format, dispatch_file
from geoupload.models import SourceFormat


class TestDetectFormat:
    """Test extension matching."""

    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("data.geojson", SourceFormat.GEOJSON),
            ("data.json", SourceFormat.GEOJSON),
            ("DATA.KML", SourceFormat.KML),
            ("rows.csv", SourceFormat.CSV),
            ("rows.xlsx", SourceFormat.EXCEL),
            ("rows.Xls", SourceFormat.EXCEL),
            ("archive.tar.csv", SourceFormat.CSV),
        ],
    )
    def test_supported(self, filename, expected):
        assert detect_format(filename) == expected

    @pytest.mark.parametrize("filename", ["shapes.shp", "notes.txt", "README", "data.kmz"])
    def test_unsupported(self, filename):
        assert detect_format(filename) is None


class TestDispatchFile:
    """Test decoding by format."""

    def test_unsupported_returns_none(self, caplog):
        assert dispatch_file("shapes.shp", b"\x00\x01") is None
        assert "Unsupported file format: shapes.shp" in caplog.text

    def test_geojson_is_collection(self, geojson_bytes):
        result = dispatch_file("points.geojson", geojson_bytes)

        assert result.source_format == SourceFormat.GEOJSON
        assert not result.needs_normalization
        assert len(result.collection.features) == 2
        assert result.rows == []

    def test_kml_is_collection(self, kml_bytes):
        result = dispatch_file("places.kml", kml_bytes)

        assert result.source_label == "KML"
        assert len(result.collection.features) == 3

    def test_csv_is_rows(self, csv_bytes):
        result = dispatch_file("rows.csv", csv_bytes)

        assert result.source_label == "CSV"
        assert result.needs_normalization
        assert result.collection is None
        assert len(result.rows) == 3

    def test_excel_is_rows(self, excel_bytes):
        result = dispatch_file("rows.xlsx", excel_bytes)

        assert result.source_label == "Excel"
        assert [row["name"] for row in result.rows] == ["Nairobi", "Mombasa"]

    def test_decode_failure_raises(self):
        with pytest.raises(LoaderError):
            dispatch_file("broken.geojson", b"{not json")
