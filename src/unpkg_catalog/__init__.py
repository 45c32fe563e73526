"""Package metadata resolution for the unpkg CDN."""

from __future__ import annotations

from unpkg_catalog.catalog import UnpkgCatalog
from unpkg_catalog.errors import CatalogError, ErrorCode
from unpkg_catalog.state import AppState, open_catalog

__all__ = [
    "UnpkgCatalog",
    "CatalogError",
    "ErrorCode",
    "AppState",
    "open_catalog",
]
