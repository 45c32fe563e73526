"""JSON fetching over a shared httpx client.

``Fetcher.fetch_json`` returns ``None`` for ordinary HTTP failures (404,
5xx) and raises ``CatalogError`` only for transport failures and bodies that
are not JSON. Timeouts are configured on the client, not here.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from unpkg_catalog.config import FetcherSettings
from unpkg_catalog.errors import CatalogError, ErrorCode

log = structlog.get_logger()


def build_http_client(settings: FetcherSettings | None = None) -> httpx.AsyncClient:
    """Create the client shared by every catalog component."""
    settings = settings or FetcherSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout_seconds),
        follow_redirects=True,
        headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
    )


class Fetcher:
    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch_json(self, url: str) -> Any | None:
        """GET ``url`` and decode the body as JSON."""
        try:
            response = await self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log.warning("fetch_network_error", url=url, error=str(exc))
            raise CatalogError(
                ErrorCode.NETWORK_FAILURE, f"Request to {url} failed: {exc}", recoverable=True
            ) from exc

        if response.status_code == 404:
            log.info("fetch_not_found", url=url)
            return None
        if not response.is_success:
            log.warning("fetch_http_error", url=url, status_code=response.status_code)
            return None

        try:
            return response.json()
        except ValueError as exc:
            raise CatalogError(
                ErrorCode.MALFORMED_RESPONSE, f"Response from {url} is not valid JSON"
            ) from exc
