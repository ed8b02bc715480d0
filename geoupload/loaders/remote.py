# =============================================================================
# Remote Fetch Loader
# =============================================================================
# Retrieves a GeoJSON document from an http(s) URL.
# =============================================================================

import logging
from typing import Optional

import httpx

from geoupload.errors import LoaderError
from geoupload.loaders.geojson import coerce_feature_collection
from geoupload.models import FeatureCollection, get_settings

__all__ = ["fetch_geojson"]

logger = logging.getLogger(__name__)


def fetch_geojson(
    url: str,
    *,
    timeout: Optional[float] = None,
    client: Optional[httpx.Client] = None,
) -> FeatureCollection:
    """
    Fetch a GeoJSON document and validate it as a FeatureCollection.

    Args:
        url: http:// or https:// URL of the document
        timeout: Request timeout in seconds (default: settings.request_timeout)
        client: Optional httpx.Client to issue the request with

    Returns:
        FeatureCollection

    Raises:
        LoaderError: On invalid URL, transport failure, non-2xx status,
            invalid JSON or a document that is not GeoJSON
    """
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        raise LoaderError(f"Invalid URL '{url}'. Must start with http:// or https://")

    if timeout is None:
        timeout = get_settings().request_timeout

    logger.info(f"Fetching GeoJSON from {url}")
    try:
        if client is not None:
            response = client.get(url, timeout=timeout, follow_redirects=True)
        else:
            response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
        document = response.json()
    except httpx.HTTPStatusError as e:
        raise LoaderError(
            f"Failed to fetch GeoJSON from URL: HTTP {e.response.status_code}"
        ) from e
    except httpx.HTTPError as e:
        raise LoaderError(f"Failed to fetch GeoJSON from URL: {e}") from e
    except ValueError as e:
        raise LoaderError(f"Response from {url} is not valid JSON: {e}") from e

    collection = coerce_feature_collection(document)
    logger.info(f"Loaded {len(collection.features)} features from {url}")
    return collection
