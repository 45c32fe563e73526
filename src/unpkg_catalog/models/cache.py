from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class PackageInfoCacheEntry(BaseModel):
    """Cached npm packument for a package."""

    name: str
    content: str  # Reduced packument JSON
    fetched_at: datetime
    expires_at: datetime
    stale: bool = False
