"""Identifier parsing and URL building for unpkg and the npm registry."""

from __future__ import annotations

from urllib.parse import quote


def parse_identifier(identifier: str) -> tuple[str, str]:
    """Split ``name@version`` into ``(name, version)``.

    The split happens on the last ``@`` that is not the first character, so
    scoped packages keep their prefix::

        >>> parse_identifier("@angular/core@17.0.0")
        ('@angular/core', '17.0.0')
        >>> parse_identifier("react")
        ('react', '')
    """
    at = identifier.rfind("@")
    if at <= 0:
        return identifier, ""
    return identifier[:at], identifier[at + 1 :]


def library_file_list_url(cdn_url: str, identifier: str) -> str:
    return f"{cdn_url.rstrip('/')}/{identifier}/?meta"


def latest_library_version_url(cdn_url: str, name: str) -> str:
    return f"{cdn_url.rstrip('/')}/{name}/package.json"


def packument_url(registry_url: str, name: str) -> str:
    # Scoped names keep the "@" but the "/" must be escaped: @scope%2Fname
    return f"{registry_url.rstrip('/')}/{quote(name, safe='@')}"


def search_url(registry_url: str) -> str:
    return f"{registry_url.rstrip('/')}/-/v1/search"
