"""Shared fixtures: wire documents and in-memory collaborator stubs."""

from __future__ import annotations

from typing import Any

import pytest

from unpkg_catalog.catalog import UnpkgCatalog
from unpkg_catalog.models.npm import NpmPackageInfo

REACT_TREE: dict[str, Any] = {
    "type": "directory",
    "path": "/",
    "files": [
        {"type": "file", "path": "/index.js"},
        {
            "type": "directory",
            "path": "/umd",
            "files": [
                {"type": "file", "path": "/umd/react.development.js"},
                {"type": "file", "path": "/umd/react.production.min.js"},
            ],
        },
    ],
}

REACT_PACKUMENT: dict[str, Any] = {
    "name": "react",
    "description": "React is a JavaScript library for building user interfaces.",
    "dist-tags": {"latest": "18.2.0", "next": "19.0.0-rc.1"},
    "versions": {
        "16.0.0": {},
        "17.0.2": {},
        "18.2.0": {},
        "19.0.0-rc.1": {},
    },
}


class StubFetcher:
    """In-memory ``fetch_json``: unknown URLs behave like a 404."""

    def __init__(
        self,
        documents: dict[str, Any] | None = None,
        errors: dict[str, Exception] | None = None,
    ) -> None:
        self.documents = documents or {}
        self.errors = errors or {}
        self.urls: list[str] = []

    async def fetch_json(self, url: str) -> Any | None:
        self.urls.append(url)
        if url in self.errors:
            raise self.errors[url]
        return self.documents.get(url)


class StubPackageSearch:
    def __init__(self, names: list[str] | None = None, error: Exception | None = None) -> None:
        self.names = names or []
        self.error = error
        self.prefixes: list[str] = []

    async def get_package_names(self, prefix: str) -> list[str]:
        self.prefixes.append(prefix)
        if self.error is not None:
            raise self.error
        return list(self.names)


class StubPackageInfo:
    def __init__(
        self,
        packages: dict[str, NpmPackageInfo] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.packages = packages or {}
        self.error = error
        self.names: list[str] = []

    async def get_package_info(self, name: str) -> NpmPackageInfo | None:
        self.names.append(name)
        if self.error is not None:
            raise self.error
        return self.packages.get(name)


@pytest.fixture()
def react_tree() -> dict[str, Any]:
    return REACT_TREE


@pytest.fixture()
def react_packument() -> dict[str, Any]:
    return REACT_PACKUMENT


@pytest.fixture()
def react_info() -> NpmPackageInfo:
    return NpmPackageInfo.from_packument(REACT_PACKUMENT)


@pytest.fixture()
def fetcher() -> StubFetcher:
    return StubFetcher()


@pytest.fixture()
def package_search() -> StubPackageSearch:
    return StubPackageSearch(names=["react", "react-dom", "react-router"])


@pytest.fixture()
def package_info(react_info: NpmPackageInfo) -> StubPackageInfo:
    return StubPackageInfo(packages={"react": react_info})


@pytest.fixture()
def catalog(
    fetcher: StubFetcher,
    package_search: StubPackageSearch,
    package_info: StubPackageInfo,
) -> UnpkgCatalog:
    return UnpkgCatalog(fetcher, package_search, package_info, cdn_url="http://unpkg.com")
