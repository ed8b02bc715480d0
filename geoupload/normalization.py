"""Tabular row to GeoJSON normalization for CSV and Excel uploads."""

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Union

from geoupload.errors import EmptyInputError, InvalidGeometryError, OutOfRangeCoordinate
from geoupload.models import Feature, FeatureCollection, MultiPolygon, Point, Polygon
from geoupload.spatial_utils.coordinates import decode_ring, validate_pair

__all__ = [
    "normalize",
    "NormalizeResult",
    "RowError",
    "GEOMETRY_COLUMN",
    "COORDINATES_COLUMN",
    "LATITUDE_COLUMN",
    "LONGITUDE_COLUMN",
]

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]

# Recognized column names
GEOMETRY_COLUMN = "geometry"
COORDINATES_COLUMN = "coordinates"
LATITUDE_COLUMN = "latitude"
LONGITUDE_COLUMN = "longitude"

# Geometry column values
GEOMETRY_POLYGON = "Polygon"
GEOMETRY_MULTIPOLYGON = "MultiPolygon"


@dataclass(frozen=True)
class RowError:
    """A row that was skipped, with the reason it was skipped."""

    row_index: int
    reason: str


@dataclass
class NormalizeResult:
    """
    Outcome of normalizing one upload.

    Attributes:
        collection: Features built from the rows that converted
        skipped_rows: Rows that had geometry columns but produced no feature
        skipped_pairs: Coordinate pairs dropped by the range check
        errors: One RowError per skipped row, in row order
    """

    collection: FeatureCollection
    skipped_rows: int = 0
    skipped_pairs: int = 0
    errors: list[RowError] = field(default_factory=list)

    @property
    def feature_count(self) -> int:
        return len(self.collection.features)


@dataclass
class _RowOutcome:
    feature: Optional[Feature] = None
    error: Optional[str] = None
    rejected: list[OutOfRangeCoordinate] = field(default_factory=list)


def _properties(row: Row) -> dict[str, Any]:
    """Copy every column except the raw coordinates payload."""
    return {key: value for key, value in row.items() if key != COORDINATES_COLUMN}


def _polygon_feature(row: Row, multi: bool) -> _RowOutcome:
    """
    Build a Polygon or MultiPolygon feature from a flattened coordinates cell.

    All pairs go into one ring; the source format carries a single ring per
    row, so a MultiPolygon holds exactly one polygon with one ring.
    """
    try:
        ring, rejected = decode_ring(row[COORDINATES_COLUMN])
    except InvalidGeometryError as e:
        return _RowOutcome(error=str(e))

    if not ring:
        return _RowOutcome(
            error="No valid coordinate pairs", rejected=rejected
        )

    positions = [[lng, lat] for lng, lat in ring]
    geometry: Union[Polygon, MultiPolygon]
    if multi:
        geometry = MultiPolygon(coordinates=[[positions]])
    else:
        geometry = Polygon(coordinates=[positions])

    return _RowOutcome(
        feature=Feature(geometry=geometry, properties=_properties(row)),
        rejected=rejected,
    )


def _point_feature(row: Row) -> _RowOutcome:
    try:
        lng, lat = validate_pair(row[LONGITUDE_COLUMN], row[LATITUDE_COLUMN])
    except OutOfRangeCoordinate as e:
        return _RowOutcome(error=f"Invalid point {e}", rejected=[e])

    return _RowOutcome(
        feature=Feature(geometry=Point(coordinates=[lng, lat]), properties=_properties(row))
    )


def _normalize_row(row: Row) -> _RowOutcome:
    """
    Resolve one row's geometry by priority.

    1. ``geometry == "MultiPolygon"`` with coordinates
    2. ``geometry == "Polygon"`` with coordinates
    3. truthy ``latitude`` and ``longitude``
    4. anything else produces no feature and no error
    """
    geometry = row.get(GEOMETRY_COLUMN)
    has_coordinates = bool(row.get(COORDINATES_COLUMN))

    if geometry == GEOMETRY_MULTIPOLYGON and has_coordinates:
        return _polygon_feature(row, multi=True)
    if geometry == GEOMETRY_POLYGON and has_coordinates:
        return _polygon_feature(row, multi=False)
    if row.get(LATITUDE_COLUMN) and row.get(LONGITUDE_COLUMN):
        return _point_feature(row)
    return _RowOutcome()


def normalize(rows: Sequence[Row], source_label: str) -> NormalizeResult:
    """
    Convert parsed tabular rows into a GeoJSON FeatureCollection.

    Failures are per row: a row whose coordinates cannot be decoded, or that
    keeps no valid pair, is skipped and recorded in ``errors``. Out-of-range
    pairs are dropped individually. The function holds no state and performs
    no I/O, so repeated calls on the same rows give identical collections.

    Args:
        rows: Rows from a CSV or Excel upload
        source_label: "CSV" or "Excel", used only in messages

    Returns:
        NormalizeResult with the collection and skip counts

    Raises:
        EmptyInputError: If ``rows`` is empty

    Example:
        >>> result = normalize([{"name": "A", "latitude": -1.3, "longitude": 36.8}], "CSV")
        >>> result.collection.features[0].geometry.coordinates
        [36.8, -1.3]
    """
    if not rows:
        raise EmptyInputError(source_label)

    features: list[Feature] = []
    errors: list[RowError] = []
    skipped_pairs = 0

    for index, row in enumerate(rows):
        outcome = _normalize_row(row)
        for pair in outcome.rejected:
            logger.warning(
                f"Dropping {source_label} row {index} coordinate pair: [{pair.lng}, {pair.lat}]"
            )
        skipped_pairs += len(outcome.rejected)

        if outcome.feature is not None:
            features.append(outcome.feature)
        elif outcome.error is not None:
            logger.warning(f"Skipping {source_label} row {index}: {outcome.error}")
            errors.append(RowError(row_index=index, reason=outcome.error))

    result = NormalizeResult(
        collection=FeatureCollection(features=features),
        skipped_rows=len(errors),
        skipped_pairs=skipped_pairs,
        errors=errors,
    )
    logger.info(
        f"Normalized {len(rows)} {source_label} rows: {result.feature_count} features, "
        f"{result.skipped_rows} rows skipped, {result.skipped_pairs} pairs dropped"
    )
    return result
