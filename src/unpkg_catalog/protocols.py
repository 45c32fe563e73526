"""Seams between the catalog and its collaborators."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from unpkg_catalog.models.npm import NpmPackageInfo


class JsonFetcherProtocol(Protocol):
    async def fetch_json(self, url: str) -> Any | None: ...


class PackageSearchProtocol(Protocol):
    async def get_package_names(self, prefix: str) -> list[str]:
        """Ranked package names matching ``prefix``."""
        ...


class PackageInfoSourceProtocol(Protocol):
    async def get_package_info(self, name: str) -> NpmPackageInfo | None:
        """Published versions for ``name``, or ``None`` when it does not exist."""
        ...
