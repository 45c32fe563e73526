from __future__ import annotations

from unpkg_catalog.models.cache import PackageInfoCacheEntry
from unpkg_catalog.models.library import (
    PROVIDER_ID,
    CompletionItem,
    CompletionSet,
    LibraryGroup,
    ResolvedIdentity,
    ResolvedLibrary,
)
from unpkg_catalog.models.npm import NpmPackageInfo
from unpkg_catalog.models.tree import DirectoryNode, FileNode, FileTreeNode, parse_tree

__all__ = [
    # library
    "PROVIDER_ID",
    "ResolvedIdentity",
    "ResolvedLibrary",
    "LibraryGroup",
    "CompletionItem",
    "CompletionSet",
    # tree
    "FileNode",
    "DirectoryNode",
    "FileTreeNode",
    "parse_tree",
    # npm
    "NpmPackageInfo",
    # cache
    "PackageInfoCacheEntry",
]
