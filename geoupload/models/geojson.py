# =============================================================================
# GeoJSON Models Module
# =============================================================================
# Pydantic models for the GeoJSON interchange shape:
# - Geometries: Point, Polygon, MultiPolygon (produced by the normalizer)
#   plus LineString, MultiPoint, MultiLineString, GeometryCollection
#   (accepted from GeoJSON/KML uploads)
# - Feature: geometry + properties
# - FeatureCollection: ordered list of features
# =============================================================================

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
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
]


Position = Annotated[list[float], Field(min_length=2)]
"""A single [lng, lat] or [lng, lat, elevation] position."""


class _GeometryBase(BaseModel):
    model_config = ConfigDict(extra="allow")


class Point(_GeometryBase):
    type: Literal["Point"] = "Point"
    coordinates: Position


class MultiPoint(_GeometryBase):
    type: Literal["MultiPoint"] = "MultiPoint"
    coordinates: list[Position]


class LineString(_GeometryBase):
    type: Literal["LineString"] = "LineString"
    coordinates: list[Position]


class MultiLineString(_GeometryBase):
    type: Literal["MultiLineString"] = "MultiLineString"
    coordinates: list[list[Position]]


class Polygon(_GeometryBase):
    """Polygon as a list of rings. Ring closure is not enforced."""

    type: Literal["Polygon"] = "Polygon"
    coordinates: list[list[Position]]


class MultiPolygon(_GeometryBase):
    type: Literal["MultiPolygon"] = "MultiPolygon"
    coordinates: list[list[list[Position]]]


class GeometryCollection(_GeometryBase):
    type: Literal["GeometryCollection"] = "GeometryCollection"
    geometries: list["Geometry"]


Geometry = Annotated[
    Union[
        Point,
        MultiPoint,
        LineString,
        MultiLineString,
        Polygon,
        MultiPolygon,
        GeometryCollection,
    ],
    Field(discriminator="type"),
]

GeometryCollection.model_rebuild()


class Feature(BaseModel):
    """
    A geometry plus arbitrary key-value properties.

    Foreign members (``id``, ``bbox``) on uploaded documents are kept.
    """

    model_config = ConfigDict(extra="allow")

    type: Literal["Feature"] = "Feature"
    geometry: Optional[Geometry] = None
    properties: Optional[dict[str, Any]] = Field(default_factory=dict)


class FeatureCollection(BaseModel):
    """
    Ordered list of features.

    Serialize with ``to_geojson()`` to get a
    plain GeoJSON dict suitable for ``json.dumps``.
    """

    model_config = ConfigDict(extra="allow")

    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[Feature] = Field(default_factory=list)

    def to_geojson(self) -> dict[str, Any]:
        """Return the collection as a JSON-compatible dict."""
        return self.model_dump(mode="json")
