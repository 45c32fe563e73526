"""Wire shape of the CDN ``?meta`` listing as a tagged variant.

The listing is a recursive document::

    {"type": "directory", "path": "/", "files": [
        {"type": "file", "path": "/index.js"},
        {"type": "directory", "path": "/umd", "files": [...]}
    ]}

``parse_tree`` discriminates on ``type`` once, so traversal never probes
fields dynamically. Unknown node types parse to ``None`` and are dropped.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class FileNode(BaseModel):
    path: str


class DirectoryNode(BaseModel):
    path: str
    files: list[FileTreeNode] | None = None  # None when the listing omits "files"


FileTreeNode = FileNode | DirectoryNode

DirectoryNode.model_rebuild()


def parse_tree(document: Any) -> FileTreeNode | None:
    if not isinstance(document, dict):
        return None

    node_type = document.get("type")
    path = document.get("path")
    if not isinstance(path, str):
        path = ""

    if node_type == "file":
        return FileNode(path=path)

    if node_type == "directory":
        raw_children = document.get("files")
        if not isinstance(raw_children, list):
            return DirectoryNode(path=path)
        children = [parse_tree(child) for child in raw_children]
        return DirectoryNode(path=path, files=[c for c in children if c is not None])

    return None
