# =============================================================================
# Spatial Utils Library
# =============================================================================
# Coordinate decoding, validation and reprojection helpers.
# =============================================================================

"""
Spatial utilities for geoupload.

This library provides:
- Coordinate decoding: flattened triples -> (lng, lat) pairs
- Swap heuristic: lat/lng order repair for out-of-range pairs
- CRS utilities: fail-open reprojection to WGS84
"""

from .coordinates import (
    decode_coordinates,
    decode_ring,
    in_range,
    iter_flat_pairs,
    validate_pair,
)
from .crs import reproject

__all__ = [
    "decode_coordinates",
    "decode_ring",
    "in_range",
    "iter_flat_pairs",
    "validate_pair",
    "reproject",
]
