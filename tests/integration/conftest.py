"""Integration test fixtures.

Provides a fully wired AppState with in-memory SQLite and a real httpx
client; tests mock the network with respx.
"""

from __future__ import annotations

import aiosqlite
import pytest

from unpkg_catalog.cache import Cache
from unpkg_catalog.config import Settings
from unpkg_catalog.fetcher import build_http_client
from unpkg_catalog.state import AppState, build_catalog


@pytest.fixture()
def settings() -> Settings:
    return Settings(cache={"db_path": ":memory:"})


@pytest.fixture()
async def app_state(settings: Settings) -> AppState:
    """Full AppState wired exactly as open_catalog() does, minus the disk."""
    async with aiosqlite.connect(":memory:") as db:
        cache = Cache(db)
        await cache.init_db()

        async with build_http_client(settings.fetcher) as client:
            yield AppState(
                settings=settings,
                http_client=client,
                cache=cache,
                catalog=build_catalog(settings, client, cache),
            )
