# =============================================================================
# geoupload
# =============================================================================
# Upload pipeline for the web GIS dashboard.
# See individual sub-packages for detailed documentation.
# =============================================================================

"""
Upload pipeline for the web GIS dashboard.

Sub-packages:
- models: Pydantic GeoJSON, spatial, service and configuration models
- spatial_utils: coordinate decoding, swap heuristic, CRS reprojection
- loaders: file dispatcher, GeoJSON/KML/CSV/Excel decoders, remote fetch
- services: backend API client and connected-service repository

Modules:
- normalization: tabular rows -> GeoJSON FeatureCollection
- datasets: session dataset list
- session: upload session tying the pieces together
"""

__version__ = "0.1.0"
