# =============================================================================
# Upload Session
# =============================================================================
# The hosting view for uploads: decodes files and URLs, normalizes tabular
# rows, optionally reprojects, and appends results to the Dataset List.
# Upload failures are reported at whole-upload granularity in UploadOutcome.
# =============================================================================

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from geoupload.datasets import DatasetList
from geoupload.errors import DuplicateServiceError, EmptyInputError, LoaderError
from geoupload.loaders import dispatch_file, fetch_geojson
from geoupload.models import (
    FeatureCollection,
    InputSubmission,
    InputType,
    ServiceRecord,
    get_settings,
)
from geoupload.normalization import NormalizeResult, RowError, normalize
from geoupload.services.api_client import ApiClient
from geoupload.services.repository import (
    JsonFileServiceRepository,
    ServiceRegistry,
    parse_api_url,
)
from geoupload.spatial_utils.crs import reproject

__all__ = ["UploadOutcome", "UploadSession"]

logger = logging.getLogger(__name__)


@dataclass
class UploadOutcome:
    """
    Result of one upload attempt.

    Attributes:
        source: File name or URL
        appended: Whether a dataset was added to the list
        index: Position of the new dataset (None when not appended)
        feature_count: Features in the new dataset
        skipped_rows: Tabular rows skipped by the normalizer
        skipped_pairs: Coordinate pairs dropped by the range check
        row_errors: Per-row skip reasons
        message: Human-readable summary
    """

    source: str
    appended: bool
    index: Optional[int] = None
    feature_count: int = 0
    skipped_rows: int = 0
    skipped_pairs: int = 0
    row_errors: list[RowError] = field(default_factory=list)
    message: str = ""


class UploadSession:
    """
    One user's upload workspace.

    Args:
        datasets: Dataset list to append to (default: a new, empty list)
        source_crs: CRS of tabular coordinates; reprojected to WGS84 when set
            (default: settings.default_source_crs)
        api_client: Backend client for service submissions
        registry: Connected-service registry
    """

    def __init__(
        self,
        datasets: Optional[DatasetList] = None,
        source_crs: Optional[str] = None,
        api_client: Optional[ApiClient] = None,
        registry: Optional[ServiceRegistry] = None,
    ) -> None:
        self.datasets = datasets if datasets is not None else DatasetList()
        self.source_crs = source_crs if source_crs is not None else get_settings().default_source_crs
        self._api_client = api_client
        self._owns_api_client = api_client is None
        self._registry = registry

    def close(self) -> None:
        """Close the backend client if this session created it."""
        if self._owns_api_client and self._api_client is not None:
            self._api_client.close()
            self._api_client = None

    def __enter__(self) -> "UploadSession":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Dataset uploads
    # ------------------------------------------------------------------

    def _append(self, source: str, collection: FeatureCollection, **counts: Any) -> UploadOutcome:
        index = self.datasets.append(collection)
        outcome = UploadOutcome(
            source=source,
            appended=True,
            index=index,
            feature_count=len(collection.features),
            message=f"Uploaded {source} as Dataset {index + 1}",
            **counts,
        )
        logger.info(f"{outcome.message} ({outcome.feature_count} features)")
        return outcome

    def load_file(self, filename: str, data: bytes) -> UploadOutcome:
        """
        Decode an uploaded file and add it to the dataset list.

        CSV and Excel rows go through the normalizer and, when a source CRS
        is configured, are reprojected to WGS84. GeoJSON and KML are added
        as decoded.
        """
        try:
            dispatched = dispatch_file(filename, data)
        except LoaderError as e:
            logger.error(f"Error parsing {filename}: {e}")
            return UploadOutcome(source=filename, appended=False, message=str(e))

        if dispatched is None:
            return UploadOutcome(
                source=filename, appended=False, message=f"Unsupported file format: {filename}"
            )

        if not dispatched.needs_normalization:
            return self._append(filename, dispatched.collection)

        try:
            result: NormalizeResult = normalize(dispatched.rows, dispatched.source_label)
        except EmptyInputError as e:
            logger.error(f"Error processing {filename}: {e}")
            return UploadOutcome(source=filename, appended=False, message=str(e))

        collection = result.collection
        if self.source_crs:
            collection = reproject(collection, self.source_crs)

        return self._append(
            filename,
            collection,
            skipped_rows=result.skipped_rows,
            skipped_pairs=result.skipped_pairs,
            row_errors=result.errors,
        )

    def load_url(self, url: str) -> UploadOutcome:
        """Fetch a GeoJSON document and add it to the dataset list."""
        try:
            collection = fetch_geojson(url)
        except LoaderError as e:
            logger.error(f"Error loading GeoJSON from URL: {e}")
            return UploadOutcome(source=url, appended=False, message=str(e))
        return self._append(url, collection)

    def remove_dataset(self, index: int) -> FeatureCollection:
        """Remove a dataset by index (IndexError when out of range)."""
        return self.datasets.remove(index)

    # ------------------------------------------------------------------
    # Connected services
    # ------------------------------------------------------------------

    @property
    def api_client(self) -> ApiClient:
        if self._api_client is None:
            self._api_client = ApiClient()
        return self._api_client

    @property
    def registry(self) -> ServiceRegistry:
        if self._registry is None:
            self._registry = ServiceRegistry(
                JsonFileServiceRepository(get_settings().services_store_path)
            )
        return self._registry

    @staticmethod
    def _require_user(user_id: Optional[str]) -> str:
        if not user_id:
            raise ValueError("You need to be logged in to add a service")
        return user_id

    def submit_service(self, user_id: Optional[str], input_type: str, data_link: str) -> Any:
        """
        Send an API, model or dataset link to the backend.

        Args:
            user_id: Signed-in user
            input_type: Sidebar choice ("api", "ml-model", "dataset") or an InputType value
            data_link: The link entered by the user

        Raises:
            ValueError: If no user is signed in or the link is empty
            ApiError: If the backend rejects the submission
        """
        submission = InputSubmission(
            user_id=self._require_user(user_id),
            input_type=InputType.from_choice(input_type),
            data_link=data_link.strip(),
        )
        return self.api_client.submit_input(submission)

    def add_endpoint(self, user_id: Optional[str], api_url: str) -> ServiceRecord:
        """
        Register an API endpoint with the backend and the local registry.

        Raises:
            ValueError: If no user is signed in or the URL is not http(s)
            DuplicateServiceError: If the URL is already connected
            ApiError: If the backend rejects the endpoint
        """
        user_id = self._require_user(user_id)
        service = parse_api_url(api_url)
        if self.registry.contains(service.api_url):
            raise DuplicateServiceError(service.api_url)

        saved = self.api_client.register_endpoint(service, user_id)
        return self.registry.add(saved, user_id=user_id)

    def delete_endpoint(self, service_id: int) -> bool:
        return self.registry.delete(service_id)

    def list_endpoints(self) -> list[ServiceRecord]:
        return self.registry.list_services()
