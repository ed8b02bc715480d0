# =============================================================================
# Service Repository - Connected API Endpoints
# =============================================================================
# Persistence contract for the "services" list (load() / save(list)) and the
# registry that adds, lists and deletes connected endpoints on top of it.
# =============================================================================

import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Optional, Protocol, Union
from urllib.parse import parse_qs, urlparse

from pydantic import ValidationError

from geoupload.errors import DuplicateServiceError, RepositoryError
from geoupload.models import ServiceRecord

__all__ = [
    "ServiceRepository",
    "InMemoryServiceRepository",
    "JsonFileServiceRepository",
    "ServiceRegistry",
    "parse_api_url",
]

logger = logging.getLogger(__name__)


class ServiceRepository(Protocol):
    """Named blob of service records."""

    def load(self) -> list[ServiceRecord]:
        ...

    def save(self, services: list[ServiceRecord]) -> None:
        ...


class InMemoryServiceRepository:
    """Repository that keeps records in memory (tests, one-off sessions)."""

    def __init__(self, services: Optional[list[ServiceRecord]] = None) -> None:
        self._services = list(services or [])

    def load(self) -> list[ServiceRecord]:
        return list(self._services)

    def save(self, services: list[ServiceRecord]) -> None:
        self._services = list(services)


class JsonFileServiceRepository:
    """
    Repository backed by a JSON array on disk.

    A missing file loads as an empty list. Writes go to a temporary file in
    the same directory and are moved into place.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> list[ServiceRecord]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise RepositoryError(f"Failed to read services from {self.path}: {e}") from e

        if not isinstance(raw, list):
            raise RepositoryError(f"Services file {self.path} must hold a JSON array")

        try:
            return [ServiceRecord.model_validate(item) for item in raw]
        except ValidationError as e:
            raise RepositoryError(f"Invalid service record in {self.path}: {e}") from e

    def save(self, services: list[ServiceRecord]) -> None:
        payload = json.dumps(
            [service.model_dump(mode="json") for service in services], indent=2
        )
        temp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(temp_path, self.path)
        except OSError as e:
            if temp_path is not None and os.path.exists(temp_path):
                os.unlink(temp_path)
            raise RepositoryError(f"Failed to write services to {self.path}: {e}") from e


# -----------------------------------------------------------------------------
# URL inspection
# -----------------------------------------------------------------------------
_PROVIDERS = (
    ("amazonaws", "AWS"),
    ("core.windows", "Azure"),
    ("cloud-object-storage", "IBM Cloud"),
    ("googleapis", "Google Cloud"),
    ("digitaloceanspaces", "DigitalOcean"),
)
_REGION_PATTERN = re.compile(r"[a-z]{2,3}-[a-z]+-\d")


def parse_api_url(url: str) -> ServiceRecord:
    """
    Infer name, provider and region from an endpoint URL.

    - name: first label of the hostname
    - provider: matched from well-known cloud hostnames, else "Unknown"
    - region: ``?region=`` query parameter, else a hostname label shaped
      like ``us-east-1``, else "Unknown"

    Raises:
        ValueError: If the URL is not http(s)

    Examples:
        >>> record = parse_api_url("https://mybucket.s3.us-west-2.amazonaws.com/data")
        >>> record.name, record.provider, record.region
        ('mybucket', 'AWS', 'us-west-2')
    """
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        raise ValueError("Invalid URL format")

    parsed = urlparse(url)
    hostname = parsed.hostname or ""
    labels = hostname.split(".")

    provider = next((label for key, label in _PROVIDERS if key in hostname), "Unknown")

    region_param = parse_qs(parsed.query).get("region")
    if region_param and region_param[0]:
        region = region_param[0]
    else:
        region = next((part for part in labels if _REGION_PATTERN.search(part)), "Unknown")

    return ServiceRecord(name=labels[0], provider=provider, region=region, api_url=url)


# -----------------------------------------------------------------------------
# Registry
# -----------------------------------------------------------------------------
class ServiceRegistry:
    """Add, list and delete connected services on top of a repository."""

    def __init__(self, repository: ServiceRepository) -> None:
        self._repository = repository

    def list_services(self) -> list[ServiceRecord]:
        return self._repository.load()

    def contains(self, api_url: str) -> bool:
        return any(service.api_url == api_url for service in self._repository.load())

    def add(self, service: ServiceRecord, user_id: Optional[str] = None) -> ServiceRecord:
        """
        Append a service, stamping it with ``user_id`` when given.

        Raises:
            DuplicateServiceError: If a service with the same api_url exists
        """
        services = self._repository.load()
        if any(existing.api_url == service.api_url for existing in services):
            raise DuplicateServiceError(service.api_url)

        if user_id is not None:
            service = service.model_copy(update={"user_id": user_id})

        services.append(service)
        self._repository.save(services)
        logger.info(f"Added service {service.name or service.api_url}")
        return service

    def delete(self, service_id: int) -> bool:
        """
        Remove the service with ``service_id``.

        Returns:
            True if a service was removed
        """
        services = self._repository.load()
        remaining = [service for service in services if service.id != service_id]
        if len(remaining) == len(services):
            return False

        self._repository.save(remaining)
        logger.info(f"Deleted service {service_id}")
        return True
