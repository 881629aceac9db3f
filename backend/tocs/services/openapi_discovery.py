import logging

import httpx

from tocs.config.defaults import DISCOVERY_PATHS
from tocs.config.settings import get_settings
from tocs.schemas.transfer import DiscoveredDocumentOut, DiscoverResponse
from tocs.services.request_executor import build_client

logger = logging.getLogger(__name__)


def document_format(path: str) -> str:
    return "Swagger" if "swagger" in path.lower() else "OpenAPI"


def discover_documents(server_url: str) -> DiscoverResponse:
    """Request the well-known documentation paths of a server and list the ones that answer."""
    base = server_url.strip().rstrip("/")
    if not base.startswith(("http://", "https://")):
        raise ValueError("serverUrl must start with http:// or https://")
    try:
        httpx.URL(base)
    except httpx.InvalidURL as exc:
        raise ValueError(f"Invalid serverUrl: {base}") from exc

    found: list[DiscoveredDocumentOut] = []
    with build_client(get_settings().discovery_timeout_seconds) as client:
        for path in DISCOVERY_PATHS:
            url = base + path
            try:
                response = client.get(url, headers={"Accept": "application/json"})
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                logger.debug("Discovery request %s failed: %s", url, exc)
                continue
            if response.is_success:
                found.append(DiscoveredDocumentOut(url=url, path=path, format=document_format(path)))
    logger.info("Discovered %d API documents at %s", len(found), base)
    return DiscoverResponse(documents=found)
