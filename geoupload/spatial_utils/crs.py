# =============================================================================
# CRS Module
# =============================================================================
# Reprojects FeatureCollections to WGS84 (EPSG:4326) using pyproj.
# Reprojection fails open: on any error the input collection is returned.
# =============================================================================

import logging
from typing import Any, Optional

from pyproj import Transformer
from pyproj.exceptions import ProjError

from geoupload.models import WGS84, FeatureCollection, validate_crs

__all__ = ["reproject", "build_transformer"]

logger = logging.getLogger(__name__)


def build_transformer(source_crs: str) -> Transformer:
    """
    Build a transformer from ``source_crs`` to WGS84 in (x, y) / (lng, lat) order.

    Raises:
        ValueError: If the CRS string is malformed
        pyproj.exceptions.CRSError: If pyproj cannot resolve the CRS
    """
    return Transformer.from_crs(validate_crs(source_crs), WGS84, always_xy=True)


def _transform_coordinates(coordinates: Any, transformer: Transformer) -> Any:
    if not coordinates:
        return coordinates
    if isinstance(coordinates[0], (int, float)):
        x, y = transformer.transform(coordinates[0], coordinates[1], errcheck=True)
        return [x, y, *coordinates[2:]]
    return [_transform_coordinates(item, transformer) for item in coordinates]


def _transform_geometry(geometry: Optional[dict], transformer: Transformer) -> Optional[dict]:
    if geometry is None:
        return None
    if geometry.get("type") == "GeometryCollection":
        geometry["geometries"] = [
            _transform_geometry(g, transformer) for g in geometry.get("geometries", [])
        ]
        return geometry
    geometry["coordinates"] = _transform_coordinates(geometry.get("coordinates"), transformer)
    return geometry


def reproject(collection: FeatureCollection, source_crs: str) -> FeatureCollection:
    """
    Reproject every geometry of a collection to WGS84.

    Returns a new collection; the input is never modified. If the CRS is
    invalid or any position fails to transform, the error is logged and the
    input collection is returned unchanged.

    Args:
        collection: FeatureCollection in ``source_crs``
        source_crs: EPSG code, WKT or PROJ string

    Returns:
        FeatureCollection in EPSG:4326, or the input on failure
    """
    try:
        if validate_crs(source_crs) == WGS84:
            return collection

        logger.info(f"Transforming from CRS: {source_crs}")
        transformer = build_transformer(source_crs)

        data = collection.to_geojson()
        for feature in data["features"]:
            feature["geometry"] = _transform_geometry(feature.get("geometry"), transformer)

        return FeatureCollection.model_validate(data)

    except (ProjError, ValueError, TypeError) as e:
        logger.error(f"Error transforming CRS '{source_crs}': {e}")
        return collection
