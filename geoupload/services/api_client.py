# =============================================================================
# API Client - Dashboard Backend
# =============================================================================
# Thin httpx wrapper for the dashboard backend: post a JSON payload, get
# parsed JSON back or an ApiError.
# =============================================================================

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from geoupload.errors import ApiError
from geoupload.models import InputSubmission, ServiceRecord, get_settings

__all__ = ["ApiClient"]

logger = logging.getLogger(__name__)


class ApiClient:
    """Client for the dashboard backend REST API."""

    INPUTS_PATH = "inputs/"
    API_ENDPOINTS_PATH = "api-endpoints/"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        settings = get_settings()
        self._client = httpx.Client(
            base_url=base_url or settings.api_base_url,
            timeout=timeout if timeout is not None else settings.request_timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @staticmethod
    def _error_detail(response: httpx.Response) -> Any:
        try:
            body = response.json()
        except ValueError:
            return response.text
        if isinstance(body, dict) and "error" in body:
            return body["error"]
        return body

    def post(self, path: str, payload: dict) -> Any:
        """
        POST a JSON payload and return the parsed JSON response.

        Raises:
            ApiError: On transport failure, non-2xx status or a non-JSON body
        """
        try:
            response = self._client.post(path, json=payload)
        except httpx.HTTPError as e:
            raise ApiError(f"Request to {path} failed: {e}") from e

        if response.is_error:
            detail = self._error_detail(response)
            raise ApiError(
                f"Backend returned HTTP {response.status_code} for {path}: {detail}",
                status_code=response.status_code,
                detail=detail,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ApiError(
                f"Backend returned invalid JSON for {path}",
                status_code=response.status_code,
                detail=response.text,
            ) from e

    def submit_input(self, submission: InputSubmission) -> Any:
        """Register an API, model or dataset link for a user."""
        payload = submission.model_dump(mode="json")
        logger.info(f"Submitting {submission.input_type.value} input for user {submission.user_id}")
        return self.post(self.INPUTS_PATH, payload)

    def register_endpoint(self, service: ServiceRecord, user_id: str) -> ServiceRecord:
        """
        Save an API endpoint on the backend.

        Returns:
            The record as stored by the backend
        """
        payload = {
            "user_id": user_id,
            "name": service.name,
            "provider": service.provider,
            "region": service.region,
            "api_url": service.api_url,
        }
        saved = self.post(self.API_ENDPOINTS_PATH, payload)
        try:
            return ServiceRecord.model_validate(saved)
        except ValidationError as e:
            raise ApiError(
                f"Backend returned an invalid service record: {e}", detail=saved
            ) from e
