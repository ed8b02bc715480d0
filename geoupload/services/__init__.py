# =============================================================================
# Services Library
# =============================================================================
# Backend API client and connected-service persistence.
# =============================================================================

from .api_client import ApiClient
from .repository import (
    InMemoryServiceRepository,
    JsonFileServiceRepository,
    ServiceRegistry,
    ServiceRepository,
    parse_api_url,
)

__all__ = [
    "ApiClient",
    "InMemoryServiceRepository",
    "JsonFileServiceRepository",
    "ServiceRegistry",
    "ServiceRepository",
    "parse_api_url",
]
