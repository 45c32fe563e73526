from __future__ import annotations

import re
from typing import Any

import semantic_version
import structlog
from pydantic import BaseModel

log = structlog.get_logger()

# Leading zeros in numeric identifiers, e.g. the "01" in "1.0.0-beta.01"
_LEADING_ZEROS = re.compile(r"(?<=[.-])0+(?=\d)")


class NpmPackageInfo(BaseModel):
    """Subset of an npm packument: identity plus the published versions."""

    name: str
    description: str = ""
    latest_version: str | None = None
    versions: list[str] = []  # published spelling, ascending

    @classmethod
    def from_packument(cls, document: dict[str, Any]) -> NpmPackageInfo:
        """Build from the JSON returned by ``GET {registry}/{name}``.

        Versions keep the spelling they were published under and are ordered
        semantically. Loose spellings that strict SemVer rejects are ordered
        by their coerced form. Raises ``ValueError`` when the document has no
        usable name.
        """
        name = document.get("name")
        if not isinstance(name, str) or not name:
            raise ValueError("packument has no name")

        dist_tags = document.get("dist-tags")
        latest = dist_tags.get("latest") if isinstance(dist_tags, dict) else None

        keyed: list[tuple[semantic_version.Version, str]] = []
        raw_versions = document.get("versions")
        if isinstance(raw_versions, dict):
            for raw in raw_versions:
                key = _sort_key(raw)
                if key is None:
                    log.warning("package_version_unparseable", name=name, version=raw)
                    continue
                keyed.append((key, raw))
        keyed.sort(key=lambda pair: pair[0])

        description = document.get("description")
        return cls(
            name=name,
            description=description if isinstance(description, str) else "",
            latest_version=latest if isinstance(latest, str) else None,
            versions=[raw for _, raw in keyed],
        )

    def to_document(self) -> dict[str, Any]:
        """Serialise back into packument shape for the cache."""
        document: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "versions": {v: {} for v in self.versions},
        }
        if self.latest_version is not None:
            document["dist-tags"] = {"latest": self.latest_version}
        return document


def _sort_key(raw: Any) -> semantic_version.Version | None:
    if not isinstance(raw, str):
        return None
    try:
        return semantic_version.Version(raw)
    except ValueError:
        pass
    try:
        return semantic_version.Version.coerce(_LEADING_ZEROS.sub("", raw))
    except ValueError:
        return None
