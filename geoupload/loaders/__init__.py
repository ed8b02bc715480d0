# =============================================================================
# Loaders Library
# =============================================================================
# Decoders for uploaded files and remote GeoJSON documents.
# =============================================================================

"""
Loaders for geoupload.

This library provides:
- dispatch_file: extension-based routing of uploaded bytes
- parse_geojson / parse_kml: documents that are already geometry
- read_csv_rows / read_excel_rows: tabular rows for the normalizer
- fetch_geojson: GeoJSON retrieval over HTTP
"""

from .dispatcher import DispatchResult, detect_format, dispatch_file, SUPPORTED_EXTENSIONS
from .geojson import coerce_feature_collection, parse_geojson
from .kml import parse_kml
from .remote import fetch_geojson
from .tabular import read_csv_rows, read_excel_rows

__all__ = [
    "DispatchResult",
    "detect_format",
    "dispatch_file",
    "SUPPORTED_EXTENSIONS",
    "coerce_feature_collection",
    "parse_geojson",
    "parse_kml",
    "fetch_geojson",
    "read_csv_rows",
    "read_excel_rows",
]
