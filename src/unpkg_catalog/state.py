"""Application state: the shared client, cache and the catalog built on them."""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

import aiosqlite
import structlog

from unpkg_catalog.cache import Cache, prepare_db_path
from unpkg_catalog.catalog import UnpkgCatalog
from unpkg_catalog.fetcher import Fetcher, build_http_client
from unpkg_catalog.npm import NpmPackageInfoCache, NpmPackageSearch

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    import httpx

    from unpkg_catalog.config import Settings

log = structlog.get_logger()


@dataclass
class AppState:
    settings: Settings
    http_client: httpx.AsyncClient
    cache: Cache
    catalog: UnpkgCatalog


def build_catalog(
    settings: Settings, http_client: httpx.AsyncClient, cache: Cache
) -> UnpkgCatalog:
    fetcher = Fetcher(http_client)
    return UnpkgCatalog(
        fetcher=fetcher,
        package_search=NpmPackageSearch(fetcher, settings.npm),
        package_info=NpmPackageInfoCache(
            fetcher, cache, settings.npm, ttl_hours=settings.cache.ttl_hours
        ),
        cdn_url=settings.cdn.url,
    )


@asynccontextmanager
async def open_catalog(settings: Settings) -> AsyncIterator[AppState]:
    """Open the cache database and HTTP client for the lifetime of the block."""
    async with aiosqlite.connect(prepare_db_path(settings.cache.db_path)) as db:
        cache = Cache(db)
        await cache.init_db()
        async with build_http_client(settings.fetcher) as client:
            log.debug("catalog_opened", db_path=settings.cache.db_path, cdn=settings.cdn.url)
            yield AppState(
                settings=settings,
                http_client=client,
                cache=cache,
                catalog=build_catalog(settings, client, cache),
            )
        await cache.cleanup_expired()
