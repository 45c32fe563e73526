"""SQLite cache for npm package info documents.

All cache operations catch ``aiosqlite.Error`` internally and degrade
gracefully: read failures return ``None`` (treated as cache miss by callers),
write failures are logged and ignored (fetched content is still returned).
Infrastructure errors never cross the Cache class boundary.

One Cache instance is shared by every caller; aiosqlite runs statements on a
single worker thread, so writes are serialised.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING

import aiosqlite
import structlog

if TYPE_CHECKING:
    from unpkg_catalog.models.cache import PackageInfoCacheEntry

log = structlog.get_logger()

_CREATE_PACKAGE_TABLE = """
CREATE TABLE IF NOT EXISTS package_info_cache (
    name        TEXT PRIMARY KEY,
    content     TEXT NOT NULL,
    fetched_at  TEXT NOT NULL,
    expires_at  TEXT NOT NULL
)
"""

_CREATE_PACKAGE_INDEX = (
    "CREATE INDEX IF NOT EXISTS idx_package_expires ON package_info_cache(expires_at)"
)


def prepare_db_path(db_path: str) -> str:
    """Expand ``db_path`` and create its parent directories."""
    if db_path == ":memory:":
        return db_path
    path = Path(db_path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return str(path)


class Cache:
    """SQLite-backed package info cache."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def init_db(self) -> None:
        """Create tables and set WAL mode. Called once at startup."""
        await self._db.execute("PRAGMA journal_mode = WAL")
        await self._db.execute(_CREATE_PACKAGE_TABLE)
        await self._db.execute(_CREATE_PACKAGE_INDEX)
        await self._db.commit()

    async def get_package_info(self, name: str) -> PackageInfoCacheEntry | None:
        """Read a package entry. Returns ``None`` on cache miss or read failure."""
        try:
            cursor = await self._db.execute(
                "SELECT name, content, fetched_at, expires_at "
                "FROM package_info_cache WHERE name = ?",
                (name,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None

            from unpkg_catalog.models.cache import PackageInfoCacheEntry

            fetched_at = datetime.fromisoformat(row[2])
            expires_at = datetime.fromisoformat(row[3])
            stale = datetime.now(UTC) > expires_at

            return PackageInfoCacheEntry(
                name=row[0],
                content=row[1],
                fetched_at=fetched_at,
                expires_at=expires_at,
                stale=stale,
            )
        except aiosqlite.Error:
            log.warning("cache_read_error", key=f"package:{name}", exc_info=True)
            return None

    async def set_package_info(self, name: str, content: str, ttl_hours: int) -> None:
        """Write a package entry. Non-fatal on failure."""
        try:
            now = datetime.now(UTC)
            expires_at = now + timedelta(hours=ttl_hours)
            await self._db.execute(
                "INSERT OR REPLACE INTO package_info_cache "
                "(name, content, fetched_at, expires_at) "
                "VALUES (?, ?, ?, ?)",
                (name, content, now.isoformat(), expires_at.isoformat()),
            )
            await self._db.commit()
        except aiosqlite.Error:
            log.warning("cache_write_error", key=f"package:{name}", exc_info=True)

    async def cleanup_expired(self) -> None:
        """Delete entries expired more than 7 days ago. Non-fatal on failure."""
        try:
            cutoff = (datetime.now(UTC) - timedelta(days=7)).isoformat()
            cursor = await self._db.execute(
                "DELETE FROM package_info_cache WHERE expires_at < ?", (cutoff,)
            )
            deleted = cursor.rowcount
            await self._db.commit()
            log.info("cache_cleanup_complete", package_deleted=deleted)
        except aiosqlite.Error:
            log.warning("cache_cleanup_error", exc_info=True)
