# =============================================================================
# Coordinates Module
# =============================================================================
# Decoding and validation of coordinate pairs for tabular uploads.
# Rows store polygon coordinates as a flattened list of (lng, lat, z) triples;
# pairs that fall outside WGS84 bounds are swapped once before being rejected.
# =============================================================================

import json
import logging
import math
from typing import Any, Iterator, List, Sequence, Tuple

from geoupload.errors import InvalidGeometryError, OutOfRangeCoordinate

__all__ = [
    "MAX_LATITUDE",
    "MAX_LONGITUDE",
    "COORDINATE_STRIDE",
    "in_range",
    "to_coordinate",
    "validate_pair",
    "decode_coordinates",
    "iter_flat_pairs",
    "decode_ring",
]

logger = logging.getLogger(__name__)

MAX_LATITUDE = 90.0
MAX_LONGITUDE = 180.0

# Flattened rows hold (lng, lat, z) triples; z is ignored.
COORDINATE_STRIDE = 3

CoordinatePair = Tuple[float, float]


def in_range(lng: float, lat: float) -> bool:
    """Return True when the pair satisfies |lat| <= 90 and |lng| <= 180."""
    return abs(lat) <= MAX_LATITUDE and abs(lng) <= MAX_LONGITUDE


def to_coordinate(value: Any) -> float:
    """
    Convert a cell value to a finite float.

    Numbers and numeric strings are accepted. Booleans, None, non-numeric
    strings, non-finite values (NaN, inf) and integers too large for a
    float return NaN so the caller's range check rejects them.
    """
    if isinstance(value, bool) or value is None:
        return math.nan
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        else:
            number = float(str(value).strip())
    except (ValueError, OverflowError):
        return math.nan
    return number if math.isfinite(number) else math.nan


def validate_pair(lng: Any, lat: Any) -> CoordinatePair:
    """
    Apply the swap heuristic to a candidate pair.

    If the pair is out of range, the two values are swapped once and checked
    again. This repairs files whose latitude/longitude columns are in the
    wrong order; it is not a reprojection.

    Args:
        lng: Candidate longitude (number or numeric string)
        lat: Candidate latitude (number or numeric string)

    Returns:
        Validated (lng, lat) pair

    Raises:
        OutOfRangeCoordinate: If the pair is invalid in both orders

    Examples:
        >>> validate_pair(36.8, -1.3)
        (36.8, -1.3)
        >>> validate_pair(-1.3, 136.8)
        (136.8, -1.3)
    """
    x = to_coordinate(lng)
    y = to_coordinate(lat)

    if math.isnan(x) or math.isnan(y):
        raise OutOfRangeCoordinate(x, y)

    if in_range(x, y):
        return x, y

    logger.debug(f"Invalid coordinate detected: [{x}, {y}]. Attempting to swap")
    x, y = y, x
    if in_range(x, y):
        return x, y

    raise OutOfRangeCoordinate(y, x)


def decode_coordinates(raw: Any) -> List[Any]:
    """
    Decode a row's ``coordinates`` cell into a flat list of values.

    Strings hold an unwrapped JSON list (``"1,2,0,3,4,0"``) and are wrapped in
    brackets before parsing. A string that was already bracketed parses to a
    single nested list, which is unwrapped.

    Raises:
        InvalidGeometryError: If the payload is not valid JSON or not a list
    """
    values = raw
    if isinstance(raw, str):
        try:
            values = json.loads(f"[{raw}]")
        except (ValueError, RecursionError) as e:
            raise InvalidGeometryError(f"Coordinates are not valid JSON: {e}") from e
        if len(values) == 1 and isinstance(values[0], list):
            values = values[0]
    elif isinstance(raw, tuple):
        values = list(raw)

    if not isinstance(values, list):
        raise InvalidGeometryError(
            f"Coordinates are not an array (got {type(raw).__name__})"
        )
    return values


def iter_flat_pairs(values: Sequence[Any]) -> Iterator[Tuple[Any, Any]]:
    """
    Walk a flattened coordinate list with a stride of three.

    Indices 0 and 1 form the first pair and index 2 is skipped, then 3 and 4
    form the next pair and index 5 is skipped, and so on. A trailing value
    with no partner is ignored.

    Examples:
        >>> list(iter_flat_pairs([1, 2, 0, 3, 4, 0]))
        [(1, 2), (3, 4)]
    """
    for i in range(0, len(values), COORDINATE_STRIDE):
        if i + 1 < len(values):
            yield values[i], values[i + 1]


def decode_ring(raw: Any) -> Tuple[List[CoordinatePair], List[OutOfRangeCoordinate]]:
    """
    Decode a ``coordinates`` cell into a single ring.

    Returns:
        Tuple of (valid pairs in order, rejected pair errors)

    Raises:
        InvalidGeometryError: If the payload cannot be decoded
    """
    ring: List[CoordinatePair] = []
    rejected: List[OutOfRangeCoordinate] = []

    for lng, lat in iter_flat_pairs(decode_coordinates(raw)):
        try:
            ring.append(validate_pair(lng, lat))
        except OutOfRangeCoordinate as e:
            rejected.append(e)

    return ring, rejected
