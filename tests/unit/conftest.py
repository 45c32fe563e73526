"""Package-info cache fixture shared by the cache and npm unit tests."""

from __future__ import annotations

from collections.abc import AsyncIterator

import aiosqlite
import pytest

from unpkg_catalog.cache import Cache


@pytest.fixture()
async def cache() -> AsyncIterator[Cache]:
    """Empty package_info_cache table on a private in-memory database."""
    async with aiosqlite.connect(":memory:") as db:
        package_cache = Cache(db)
        await package_cache.init_db()
        yield package_cache
