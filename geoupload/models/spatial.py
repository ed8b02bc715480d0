# =============================================================================
# Spatial Types Module
# =============================================================================
# Provides reusable spatial data types with validation:
# - validate_crs: Coordinate Reference System strings (EPSG, WKT, PROJ)
# - Bounds: Geographic bounding box of a FeatureCollection
# - SourceFormat: Upload formats understood by the dispatcher
# =============================================================================

import re
from enum import Enum
from typing import Any, Iterator, Optional

from pydantic import BaseModel, Field, model_validator

from .geojson import FeatureCollection

__all__ = ["Bounds", "SourceFormat", "validate_crs", "iter_positions", "WGS84"]

WGS84 = "EPSG:4326"


# =============================================================================
# Enums
# =============================================================================

class SourceFormat(str, Enum):
    """Upload formats, keyed by the label used in log and error messages."""
    GEOJSON = "GeoJSON"
    KML = "KML"
    CSV = "CSV"
    EXCEL = "Excel"

    @property
    def is_tabular(self) -> bool:
        """Tabular formats yield rows that still need normalizing."""
        return self in (SourceFormat.CSV, SourceFormat.EXCEL)


# =============================================================================
# CRS (Coordinate Reference System)
# =============================================================================

_EPSG_PATTERN = re.compile(r"^EPSG:\d{4,6}$", re.IGNORECASE)
_WKT_PREFIXES = ("PROJCS[", "GEOGCS[", "COMPD_CS[", "GEOCCS[", "PROJCRS[", "GEOGCRS[")


def validate_crs(value: str) -> str:
    """
    Validate and normalize a Coordinate Reference System string.

    Supports three formats:
    1. EPSG codes: "EPSG:4326", "epsg:32633" (normalized to uppercase)
    2. WKT strings: "PROJCS[...]", "GEOGCS[...]" and their WKT2 spellings
    3. PROJ strings: "+proj=utm +zone=33 +datum=WGS84 ..."

    Args:
        value: CRS string to validate

    Returns:
        Normalized CRS string

    Raises:
        TypeError: If the value is not a string
        ValueError: If the CRS format is invalid
    """
    if not isinstance(value, str):
        raise TypeError(f"CRS must be a string, got {type(value).__name__}")

    value = value.strip()
    if not value:
        raise ValueError("CRS must be a non-empty string")

    if _EPSG_PATTERN.match(value):
        return value.upper()

    if value.startswith(_WKT_PREFIXES) and value.endswith("]"):
        if value.count("[") == value.count("]"):
            return value

    if value.startswith("+proj=") and "=" in value[6:]:
        return value

    raise ValueError(
        f"Invalid CRS format. Must be one of:\n"
        f"  - EPSG code: 'EPSG:4326'\n"
        f"  - WKT string: 'PROJCS[...]' or 'GEOGCS[...]'\n"
        f"  - PROJ string: '+proj=utm +zone=33 ...'\n"
        f"Got: {value[:100]}{'...' if len(value) > 100 else ''}"
    )


# =============================================================================
# Bounds (Geographic Bounding Box)
# =============================================================================

def iter_positions(coordinates: Any) -> Iterator[list[float]]:
    """Yield every position from an arbitrarily nested coordinates array."""
    if not coordinates:
        return
    if isinstance(coordinates[0], (int, float)):
        yield coordinates
        return
    for item in coordinates:
        yield from iter_positions(item)


class Bounds(BaseModel):
    """
    Geographic bounding box.

    Attributes:
        minx: Minimum longitude (west)
        miny: Minimum latitude (south)
        maxx: Maximum longitude (east)
        maxy: Maximum latitude (north)
    """

    minx: float = Field(..., description="Minimum X coordinate (west)")
    miny: float = Field(..., description="Minimum Y coordinate (south)")
    maxx: float = Field(..., description="Maximum X coordinate (east)")
    maxy: float = Field(..., description="Maximum Y coordinate (north)")

    @model_validator(mode="after")
    def validate_bounds(self) -> "Bounds":
        """Point bounds (min == max) are allowed; inverted bounds are not."""
        if self.minx > self.maxx:
            raise ValueError(
                f"Invalid bounds: minx ({self.minx}) must be less than or equal to maxx ({self.maxx})"
            )
        if self.miny > self.maxy:
            raise ValueError(
                f"Invalid bounds: miny ({self.miny}) must be less than or equal to maxy ({self.maxy})"
            )
        return self

    @classmethod
    def from_collection(cls, collection: FeatureCollection) -> Optional["Bounds"]:
        """
        Compute the bounds of every position in a collection.

        Returns:
            Bounds, or None when the collection has no positions
        """
        xs: list[float] = []
        ys: list[float] = []
        for feature in collection.features:
            geometry = feature.geometry
            if geometry is None:
                continue
            geometries = getattr(geometry, "geometries", None) or [geometry]
            for geom in geometries:
                for position in iter_positions(getattr(geom, "coordinates", None)):
                    xs.append(position[0])
                    ys.append(position[1])

        if not xs:
            return None
        return cls(minx=min(xs), miny=min(ys), maxx=max(xs), maxy=max(ys))

    def as_list(self) -> list[float]:
        """Return ``[minx, miny, maxx, maxy]`` (GeoJSON bbox order)."""
        return [self.minx, self.miny, self.maxx, self.maxy]
