# =============================================================================
# KML Loader
# =============================================================================
# Converts KML documents into GeoJSON FeatureCollections.
# Each Placemark becomes one Feature; name, description, styleUrl and
# ExtendedData values become properties. MultiGeometry with more than one
# child becomes a GeometryCollection.
# =============================================================================

import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from geoupload.errors import LoaderError
from geoupload.models import Feature, FeatureCollection

__all__ = ["parse_kml", "KML_NAMESPACE"]

logger = logging.getLogger(__name__)

KML_NAMESPACE = "http://www.opengis.net/kml/2.2"

_GEOMETRY_TAGS = ("Point", "LineString", "LinearRing", "Polygon", "MultiGeometry")


def _local(tag: str) -> str:
    """Strip the ``{namespace}`` prefix from an element tag."""
    return tag.rsplit("}", 1)[-1]


def _namespace(tag: str) -> str:
    return tag[1:].split("}", 1)[0] if tag.startswith("{") else ""


def _child(element: ET.Element, name: str) -> Optional[ET.Element]:
    for child in element:
        if _local(child.tag) == name:
            return child
    return None


def _children(element: ET.Element, name: str) -> List[ET.Element]:
    return [child for child in element if _local(child.tag) == name]


def _text(element: Optional[ET.Element]) -> Optional[str]:
    if element is None or element.text is None:
        return None
    return element.text.strip()


def _parse_coordinates(element: Optional[ET.Element]) -> List[List[float]]:
    """
    Parse a ``<coordinates>`` element: whitespace separated ``lng,lat[,alt]`` tuples.

    Raises:
        LoaderError: If a tuple is not numeric
    """
    text = _text(element)
    if not text:
        return []

    positions = []
    for chunk in text.split():
        try:
            values = [float(v) for v in chunk.split(",") if v != ""]
        except ValueError as e:
            raise LoaderError(f"Invalid KML coordinate tuple '{chunk}'") from e
        if len(values) >= 2:
            positions.append(values)
    return positions


def _parse_geometry(element: ET.Element) -> Optional[Dict[str, Any]]:
    tag = _local(element.tag)

    if tag == "Point":
        positions = _parse_coordinates(_child(element, "coordinates"))
        return {"type": "Point", "coordinates": positions[0]} if positions else None

    if tag in ("LineString", "LinearRing"):
        positions = _parse_coordinates(_child(element, "coordinates"))
        return {"type": "LineString", "coordinates": positions} if positions else None

    if tag == "Polygon":
        rings = []
        for boundary_tag in ("outerBoundaryIs", "innerBoundaryIs"):
            for boundary in _children(element, boundary_tag):
                ring = _child(boundary, "LinearRing")
                if ring is not None:
                    positions = _parse_coordinates(_child(ring, "coordinates"))
                    if positions:
                        rings.append(positions)
        return {"type": "Polygon", "coordinates": rings} if rings else None

    if tag == "MultiGeometry":
        geometries = [
            geom
            for child in element
            if _local(child.tag) in _GEOMETRY_TAGS
            for geom in [_parse_geometry(child)]
            if geom is not None
        ]
        if not geometries:
            return None
        if len(geometries) == 1:
            return geometries[0]
        return {"type": "GeometryCollection", "geometries": geometries}

    return None


def _parse_properties(placemark: ET.Element) -> Dict[str, Any]:
    properties: Dict[str, Any] = {}

    for name in ("name", "description", "styleUrl"):
        value = _text(_child(placemark, name))
        if value is not None:
            properties[name] = value

    extended = _child(placemark, "ExtendedData")
    if extended is not None:
        for data in _children(extended, "Data"):
            key = data.get("name")
            if key:
                properties[key] = _text(_child(data, "value"))
        for schema_data in _children(extended, "SchemaData"):
            for simple in _children(schema_data, "SimpleData"):
                key = simple.get("name")
                if key:
                    properties[key] = _text(simple)

    return properties


def parse_kml(data: Union[bytes, str], filename: str = "<kml>") -> FeatureCollection:
    """
    Parse a KML document into a FeatureCollection.

    Placemarks are collected from anywhere in the document (Document and
    Folder nesting is flattened). A Placemark without a geometry becomes a
    Feature with a null geometry.

    Args:
        data: KML document bytes or text
        filename: Name used in log and error messages

    Returns:
        FeatureCollection with one Feature per Placemark

    Raises:
        LoaderError: If the document is not well-formed KML
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise LoaderError(f"Failed to parse KML file '{filename}': {e}") from e

    if _local(root.tag) != "kml":
        raise LoaderError(f"'{filename}' is not a KML document (root <{_local(root.tag)}>)")

    namespace = _namespace(root.tag)
    if namespace != KML_NAMESPACE:
        logger.info(f"{filename} uses KML namespace '{namespace}' instead of {KML_NAMESPACE}")

    features = []
    for placemark in root.iter():
        if _local(placemark.tag) != "Placemark":
            continue

        geometry = None
        for child in placemark:
            if _local(child.tag) in _GEOMETRY_TAGS:
                geometry = _parse_geometry(child)
                break

        try:
            features.append(
                Feature.model_validate(
                    {"geometry": geometry, "properties": _parse_properties(placemark)}
                )
            )
        except ValidationError as e:
            raise LoaderError(f"Invalid Placemark geometry in '{filename}': {e}") from e

    logger.info(f"Parsed {len(features)} placemarks from {filename}")
    return FeatureCollection(features=features)
