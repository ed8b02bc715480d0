# =============================================================================
# Data Models Library
# =============================================================================
# Pydantic models and schemas for the upload pipeline.
# =============================================================================

"""
Data models for geoupload.

This library provides:
- GeoJSON models: Feature, FeatureCollection, geometries
- Spatial types: CRS validation, Bounds, SourceFormat
- Service models: ServiceRecord, InputSubmission
- Configuration models
"""

# GeoJSON models
from .geojson import (
    Position,
    Point,
    MultiPoint,
    LineString,
    MultiLineString,
    Polygon,
    MultiPolygon,
    GeometryCollection,
    Geometry,
    Feature,
    FeatureCollection,
)

# Spatial types
from .spatial import (
    WGS84,
    Bounds,
    SourceFormat,
    iter_positions,
    validate_crs,
)

# Service models
from .service import (
    ServiceRecord,
    InputType,
    InputSubmission,
)

# Configuration models
from .config import (
    GeoUploadSettings,
    get_settings,
)

__all__ = [
    # GeoJSON models
    "Position",
    "Point",
    "MultiPoint",
    "LineString",
    "MultiLineString",
    "Polygon",
    "MultiPolygon",
    "GeometryCollection",
    "Geometry",
    "Feature",
    "FeatureCollection",
    # Spatial types
    "WGS84",
    "Bounds",
    "SourceFormat",
    "iter_positions",
    "validate_crs",
    # Service models
    "ServiceRecord",
    "InputType",
    "InputSubmission",
    # Configuration models
    "GeoUploadSettings",
    "get_settings",
]
