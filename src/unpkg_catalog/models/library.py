from __future__ import annotations

from pydantic import BaseModel, Field

PROVIDER_ID = "unpkg"


class ResolvedIdentity(BaseModel):
    """Concrete (name, version) pair resolved from a loosely typed identifier."""

    name: str
    version: str = ""  # "" means unspecified: use the latest known version


class ResolvedLibrary(BaseModel):
    """A package at a version, with every file the CDN publishes for it.

    Built fresh on every resolution call and owned by the caller.
    """

    name: str
    version: str
    files: dict[str, bool] = {}  # relative path -> selected, insertion ordered
    provider_id: str = PROVIDER_ID

    @property
    def library_id(self) -> str:
        return f"{self.name}@{self.version}" if self.version else self.name


class LibraryGroup(BaseModel):
    """Handle for a package name returned by search."""

    name: str

    @property
    def display_name(self) -> str:
        return self.name


class CompletionItem(BaseModel):
    display_text: str
    insertion_text: str


class CompletionSet(BaseModel):
    start: int = 0
    length: int = 0
    completions: list[CompletionItem] = Field(default_factory=list)
