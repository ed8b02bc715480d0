# =============================================================================
# Error Taxonomy
# =============================================================================
# Exceptions raised across the upload pipeline:
# - EmptyInputError: whole-upload failure (no rows to normalize)
# - InvalidGeometryError: a single row's coordinate payload is malformed
# - OutOfRangeCoordinate: a pair fails the lat/lng bounds after swapping
# - LoaderError: a file or URL could not be decoded
# - ApiError / RepositoryError / DuplicateServiceError: service layer
# =============================================================================

from typing import Any, Optional

__all__ = [
    "GeoUploadError",
    "EmptyInputError",
    "InvalidGeometryError",
    "OutOfRangeCoordinate",
    "LoaderError",
    "ApiError",
    "RepositoryError",
    "DuplicateServiceError",
]


class GeoUploadError(Exception):
    """Base class for all geoupload errors."""


class EmptyInputError(GeoUploadError):
    """Raised when a tabular upload contains zero rows."""

    def __init__(self, source_label: str):
        self.source_label = source_label
        super().__init__(f"{source_label} file is empty")


class InvalidGeometryError(GeoUploadError):
    """Raised when a row's coordinate payload cannot be decoded."""


class OutOfRangeCoordinate(GeoUploadError):
    """Raised when a coordinate pair is out of range even after swapping."""

    def __init__(self, lng: float, lat: float):
        self.lng = lng
        self.lat = lat
        super().__init__(f"Invalid coordinate pair: [{lng}, {lat}]")


class LoaderError(GeoUploadError):
    """Raised when an uploaded file or remote document cannot be decoded."""


class ApiError(GeoUploadError):
    """
    Raised when the backend API rejects a request.

    Attributes:
        status_code: HTTP status code (None for transport failures)
        detail: Backend-supplied error message or response body
    """

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Any = None):
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)


class RepositoryError(GeoUploadError):
    """Raised when persisted service records cannot be read or written."""


class DuplicateServiceError(GeoUploadError):
    """Raised when registering an API URL that is already connected."""

    def __init__(self, api_url: str):
        self.api_url = api_url
        super().__init__(f"This API URL already exists: {api_url}")
