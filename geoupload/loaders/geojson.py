"""Parsing of GeoJSON documents into FeatureCollections."""

import json
import logging
from typing import Any, Union

from pydantic import ValidationError

from geoupload.errors import LoaderError
from geoupload.models import Feature, FeatureCollection

__all__ = ["parse_geojson", "coerce_feature_collection"]

logger = logging.getLogger(__name__)

_GEOMETRY_TYPES = {
    "Point",
    "MultiPoint",
    "LineString",
    "MultiLineString",
    "Polygon",
    "MultiPolygon",
    "GeometryCollection",
}


def coerce_feature_collection(document: Any) -> FeatureCollection:
    """
    Validate a decoded GeoJSON object as a FeatureCollection.

    A bare Feature or geometry is wrapped in a single-feature collection.

    Raises:
        LoaderError: If the object is not GeoJSON
    """
    if not isinstance(document, dict):
        raise LoaderError(f"GeoJSON must be an object, got {type(document).__name__}")

    doc_type = document.get("type")
    try:
        if doc_type == "FeatureCollection":
            return FeatureCollection.model_validate(document)
        if doc_type == "Feature":
            return FeatureCollection(features=[Feature.model_validate(document)])
        if doc_type in _GEOMETRY_TYPES:
            return FeatureCollection(
                features=[Feature.model_validate({"geometry": document, "properties": {}})]
            )
    except ValidationError as e:
        raise LoaderError(f"Invalid GeoJSON {doc_type}: {e}") from e

    raise LoaderError(f"Unsupported GeoJSON type: {doc_type!r}")


def parse_geojson(data: Union[bytes, str], filename: str = "<geojson>") -> FeatureCollection:
    """
    Parse GeoJSON text into a FeatureCollection.

    Raises:
        LoaderError: If the text is not valid JSON or not GeoJSON
    """
    try:
        document = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise LoaderError(f"Failed to parse GeoJSON file '{filename}': {e}") from e

    collection = coerce_feature_collection(document)
    logger.info(f"Parsed {len(collection.features)} features from {filename}")
    return collection
