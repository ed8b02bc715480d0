# =============================================================================
# File Type Dispatcher
# =============================================================================
# Routes uploaded bytes to a decoder by file extension:
# - .geojson / .json → FeatureCollection
# - .kml            → FeatureCollection
# - .csv            → rows ("CSV")
# - .xlsx / .xls    → rows ("Excel")
# Unsupported extensions are logged and return None.
# =============================================================================

import logging
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any, Callable, Dict, List, Optional

from geoupload.loaders.geojson import parse_geojson
from geoupload.loaders.kml import parse_kml
from geoupload.loaders.tabular import read_csv_rows, read_excel_rows
from geoupload.models import FeatureCollection, SourceFormat

__all__ = ["DispatchResult", "dispatch_file", "detect_format", "SUPPORTED_EXTENSIONS"]

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS: Dict[str, SourceFormat] = {
    ".geojson": SourceFormat.GEOJSON,
    ".json": SourceFormat.GEOJSON,
    ".kml": SourceFormat.KML,
    ".csv": SourceFormat.CSV,
    ".xlsx": SourceFormat.EXCEL,
    ".xls": SourceFormat.EXCEL,
}


@dataclass
class DispatchResult:
    """
    Decoded upload.

    Exactly one of ``collection`` (GeoJSON/KML) or ``rows`` (CSV/Excel) is set.
    """

    filename: str
    source_format: SourceFormat
    collection: Optional[FeatureCollection] = None
    rows: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def source_label(self) -> str:
        return self.source_format.value

    @property
    def needs_normalization(self) -> bool:
        return self.source_format.is_tabular


def detect_format(filename: str) -> Optional[SourceFormat]:
    """Return the SourceFormat for a file name, or None if unsupported."""
    return SUPPORTED_EXTENSIONS.get(PurePath(filename).suffix.lower())


_COLLECTION_DECODERS: Dict[SourceFormat, Callable[[bytes, str], FeatureCollection]] = {
    SourceFormat.GEOJSON: parse_geojson,
    SourceFormat.KML: parse_kml,
}

_ROW_DECODERS: Dict[SourceFormat, Callable[[bytes, str], List[Dict[str, Any]]]] = {
    SourceFormat.CSV: read_csv_rows,
    SourceFormat.EXCEL: read_excel_rows,
}


def dispatch_file(filename: str, data: bytes) -> Optional[DispatchResult]:
    """
    Decode an uploaded file by extension.

    Args:
        filename: Original file name (extension is matched case-insensitively)
        data: Raw file bytes

    Returns:
        DispatchResult, or None for unsupported extensions

    Raises:
        LoaderError: If a supported file cannot be decoded
    """
    source_format = detect_format(filename)
    if source_format is None:
        logger.warning(f"Unsupported file format: {filename}")
        return None

    logger.info(f"Decoding {filename} as {source_format.value}")
    if source_format in _COLLECTION_DECODERS:
        collection = _COLLECTION_DECODERS[source_format](data, filename)
        return DispatchResult(filename=filename, source_format=source_format, collection=collection)

    rows = _ROW_DECODERS[source_format](data, filename)
    return DispatchResult(filename=filename, source_format=source_format, rows=rows)
