"""npm registry collaborators: name search and cached package info."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

import structlog

from unpkg_catalog.errors import CatalogError, ErrorCode
from unpkg_catalog.identifiers import packument_url, search_url
from unpkg_catalog.models.npm import NpmPackageInfo

if TYPE_CHECKING:
    from unpkg_catalog.cache import Cache
    from unpkg_catalog.config import NpmSettings
    from unpkg_catalog.protocols import JsonFetcherProtocol

log = structlog.get_logger()


class NpmPackageSearch:
    """Ranked package-name search against ``/-/v1/search``."""

    def __init__(self, fetcher: JsonFetcherProtocol, settings: NpmSettings) -> None:
        self._fetcher = fetcher
        self._settings = settings

    async def get_package_names(self, prefix: str) -> list[str]:
        prefix = prefix.strip()
        if not prefix:
            return []

        query = _query(prefix, self._settings.search_size)
        url = f"{search_url(self._settings.registry_url)}?{query}"
        document = await self._fetcher.fetch_json(url)
        if document is None:
            return []

        objects = document.get("objects") if isinstance(document, dict) else None
        if not isinstance(objects, list):
            raise CatalogError(
                ErrorCode.MALFORMED_RESPONSE, f"Search response for {prefix!r} has no objects"
            )

        names: list[str] = []
        for obj in objects:
            package = obj.get("package") if isinstance(obj, dict) else None
            name = package.get("name") if isinstance(package, dict) else None
            if isinstance(name, str) and name not in names:
                names.append(name)
        return names


class NpmPackageInfoCache:
    """Package info lookups backed by the shared SQLite cache.

    Fresh cache hits skip the network. Stale hits are refreshed, and served
    as-is when the refresh fails.
    """

    def __init__(
        self,
        fetcher: JsonFetcherProtocol,
        cache: Cache,
        settings: NpmSettings,
        ttl_hours: int,
    ) -> None:
        self._fetcher = fetcher
        self._cache = cache
        self._settings = settings
        self._ttl_hours = ttl_hours

    async def get_package_info(self, name: str) -> NpmPackageInfo | None:
        entry = await self._cache.get_package_info(name)
        if entry is not None and not entry.stale:
            cached = _from_cache_content(name, entry.content)
            if cached is not None:
                return cached

        try:
            url = packument_url(self._settings.registry_url, name)
            document = await self._fetcher.fetch_json(url)
        except CatalogError:
            if entry is None:
                raise
            log.warning("package_info_refresh_failed", name=name, exc_info=True)
            return _from_cache_content(name, entry.content)

        if document is None:
            if entry is None:
                return None
            log.warning("package_info_refresh_empty", name=name)
            return _from_cache_content(name, entry.content)
        if not isinstance(document, dict):
            raise CatalogError(
                ErrorCode.MALFORMED_RESPONSE, f"Packument for {name!r} is not an object"
            )

        try:
            info = NpmPackageInfo.from_packument(document)
        except ValueError as exc:
            raise CatalogError(
                ErrorCode.MALFORMED_RESPONSE, f"Packument for {name!r}: {exc}"
            ) from exc

        await self._cache.set_package_info(name, json.dumps(info.to_document()), self._ttl_hours)
        return info


def _query(prefix: str, size: int) -> str:
    return urlencode({"text": prefix, "size": size})


def _from_cache_content(name: str, content: str) -> NpmPackageInfo | None:
    try:
        document: Any = json.loads(content)
        return NpmPackageInfo.from_packument(document)
    except (ValueError, AttributeError):
        log.warning("cache_content_invalid", key=f"package:{name}", exc_info=True)
        return None
