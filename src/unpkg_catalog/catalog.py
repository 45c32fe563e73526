"""Library catalog for the unpkg CDN.

Every public operation is a boundary: transport and parse faults are logged
and collapse to "no result" (``None``, ``[]`` or an empty ``CompletionSet``).
A package that does not exist looks the same as a failed fetch. Cancellation
is the exception: ``asyncio.CancelledError`` is a ``BaseException`` and is
never caught here, so a cancelled call unwinds at its current ``await``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog

from unpkg_catalog.errors import CatalogError
from unpkg_catalog.identifiers import (
    latest_library_version_url,
    library_file_list_url,
    parse_identifier,
)
from unpkg_catalog.models.library import (
    PROVIDER_ID,
    CompletionItem,
    CompletionSet,
    LibraryGroup,
    ResolvedIdentity,
    ResolvedLibrary,
)
from unpkg_catalog.models.tree import parse_tree
from unpkg_catalog.tree import flatten

if TYPE_CHECKING:
    from unpkg_catalog.protocols import (
        JsonFetcherProtocol,
        PackageInfoSourceProtocol,
        PackageSearchProtocol,
    )

log = structlog.get_logger()

# Faults that are downgraded at the public boundary
_RECOVERABLE = (CatalogError, httpx.HTTPError, ValueError, KeyError, TypeError)


class UnpkgCatalog:
    def __init__(
        self,
        fetcher: JsonFetcherProtocol,
        package_search: PackageSearchProtocol,
        package_info: PackageInfoSourceProtocol,
        cdn_url: str = "http://unpkg.com",
    ) -> None:
        self._fetcher = fetcher
        self._package_search = package_search
        self._package_info = package_info
        self._cdn_url = cdn_url
        self.provider_id = PROVIDER_ID

    # ------------------------------------------------------------------
    # Version resolution
    # ------------------------------------------------------------------

    async def resolve_identity(self, identifier: str) -> ResolvedIdentity | None:
        """Turn ``name`` or ``name@version`` into a concrete identity.

        A name the registry knows resolves to its canonical spelling. A name
        it does not know still resolves, unchanged, when name search returns
        candidates for it, so partially typed names can be completed.
        """
        name, version = parse_identifier(identifier)
        if not name:
            return None

        try:
            info = await self._package_info.get_package_info(name)
            if info is not None:
                return ResolvedIdentity(name=info.name, version=version)

            if await self._package_search.get_package_names(name):
                return ResolvedIdentity(name=name, version=version)
        except _RECOVERABLE:
            log.warning("resolve_identity_failed", identifier=identifier, exc_info=True)
            return None

        log.debug("resolve_identity_not_found", identifier=identifier)
        return None

    async def get_latest_version(
        self, identifier: str, include_pre_releases: bool = False
    ) -> str | None:
        """Version published under the ``latest`` tag, read from package.json.

        ``include_pre_releases`` is accepted for interface parity; the CDN
        always serves the ``latest`` dist-tag's manifest.
        """
        identity = await self.resolve_identity(identifier)
        if identity is None:
            return None

        url = latest_library_version_url(self._cdn_url, identity.name)
        try:
            manifest = await self._fetcher.fetch_json(url)
        except _RECOVERABLE:
            log.error("latest_version_fetch_failed", name=identity.name, exc_info=True)
            return None

        if not isinstance(manifest, dict):
            return None
        version = manifest.get("version")
        if not isinstance(version, str):
            log.warning("latest_version_missing", name=identity.name, url=url)
            return None
        return version

    async def get_library(self, identifier: str) -> ResolvedLibrary | None:
        """Resolve ``identifier`` and list every file it publishes."""
        identity = await self.resolve_identity(identifier)
        if identity is None:
            return None

        version = identity.version
        if not version:
            version = await self._latest_known_version(identity.name)

        files = await self.list_files(identifier)
        return ResolvedLibrary(
            name=identity.name,
            version=version,
            files=dict.fromkeys(files, False),
            provider_id=self.provider_id,
        )

    async def _latest_known_version(self, name: str) -> str:
        try:
            info = await self._package_info.get_package_info(name)
        except _RECOVERABLE:
            log.warning("package_info_failed", name=name, exc_info=True)
            return ""
        if info is None:
            return ""
        if info.latest_version:
            return info.latest_version
        return info.versions[-1] if info.versions else ""

    # ------------------------------------------------------------------
    # File listing
    # ------------------------------------------------------------------

    async def list_files(self, identifier: str) -> list[str]:
        """Relative paths of every file under ``{cdn}/{identifier}/?meta``."""
        url = library_file_list_url(self._cdn_url, identifier)
        try:
            document = await self._fetcher.fetch_json(url)
        except _RECOVERABLE:
            log.error("file_list_fetch_failed", identifier=identifier, exc_info=True)
            return []

        if document is None:
            return []
        return flatten(parse_tree(document))

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------

    async def get_completion_set(
        self, library_name_start: str, caret_position: int
    ) -> CompletionSet:
        """Suggestions for the segment of ``library_name_start`` under the caret.

        With the caret inside the name (or right after it, before the ``@``)
        package names are suggested; past the ``@`` every published version
        is suggested as ``name@version``.
        """
        completion_set = CompletionSet(start=0, length=len(library_name_start))

        try:
            identity = await self.resolve_identity(library_name_start)
            if identity is None:
                return completion_set

            name, version = identity.name, identity.version
            if caret_position <= len(name):
                completion_set.length = len(name)
                typed_name, _ = parse_identifier(library_name_start)
                for package_name in await self._package_search.get_package_names(typed_name):
                    completion_set.completions.append(
                        CompletionItem(display_text=package_name, insertion_text=package_name)
                    )
            else:
                completion_set.start = len(name) + 1
                completion_set.length = len(version)
                info = await self._package_info.get_package_info(name)
                for published in info.versions if info is not None else ():
                    item_text = f"{name}@{published}"
                    completion_set.completions.append(
                        CompletionItem(display_text=item_text, insertion_text=item_text)
                    )
        except Exception:
            log.error("completion_failed", identifier=library_name_start, exc_info=True)

        return completion_set

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    async def search(self, term: str, max_hits: int) -> list[LibraryGroup]:
        """Package groups for ``term`` in search rank order, at most ``max_hits``."""
        try:
            package_names = await self._package_search.get_package_names(term)
        except _RECOVERABLE:
            log.error("search_failed", term=term, exc_info=True)
            return []

        if max_hits > 0:
            package_names = package_names[:max_hits]
        return [LibraryGroup(name=package_name) for package_name in package_names]
