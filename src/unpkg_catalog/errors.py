"""Error taxonomy for CDN and registry access.

``CatalogError`` is raised by internal helpers (fetcher, npm collaborators)
and caught at the boundary of every public ``UnpkgCatalog`` operation, where
it is logged and collapsed to "no result". Cancellation is not an error and
is never represented here: ``asyncio.CancelledError`` propagates untouched.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    NETWORK_FAILURE = "NETWORK_FAILURE"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    NOT_FOUND = "NOT_FOUND"


class CatalogError(Exception):
    """Failure talking to the CDN or the npm registry."""

    def __init__(self, code: ErrorCode, message: str, *, recoverable: bool = False) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"
