"""Flattening of the CDN directory listing into relative file paths."""

from __future__ import annotations

from typing import TYPE_CHECKING

from unpkg_catalog.models.tree import DirectoryNode, FileNode

if TYPE_CHECKING:
    from unpkg_catalog.models.tree import FileTreeNode


def flatten(root: FileTreeNode | None) -> list[str]:
    """Return every file path under ``root`` in depth-first, pre-order order.

    Paths come back without their leading ``/`` (``dist/jquery.js`` rather
    than ``/dist/jquery.js``) so callers can store them as relative paths.
    """
    files: list[str] = []
    get_files(root, files)
    return files


def get_files(node: FileTreeNode | None, files: list[str]) -> None:
    """Append the files under ``node`` to ``files``."""
    if files is None:
        raise ValueError("files must not be None")
    _collect(node, files)


def _collect(node: FileTreeNode | None, files: list[str]) -> None:
    if isinstance(node, FileNode):
        if node.path:
            files.append(node.path[1:])
    elif isinstance(node, DirectoryNode):
        for child in node.files or ():
            _collect(child, files)
