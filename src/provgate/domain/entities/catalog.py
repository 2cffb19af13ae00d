"""Catalog value objects.

Pure value objects: no framework dependencies, no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CatalogEntry:
    """A named, filterable listing tab (e.g. "Latest")."""

    title: str
    filter: str = ""  # "" means default/popular

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "filter": self.filter}


@dataclass(frozen=True)
class GenreEntry:
    """Same shape as a catalog entry, kept in its own collection."""

    title: str
    filter: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "filter": self.filter}


DEFAULT_CATALOG: tuple[CatalogEntry, ...] = (
    CatalogEntry(title="Popular", filter=""),
    CatalogEntry(title="Latest", filter="latest"),
)


@dataclass(frozen=True)
class ProviderCatalog:
    """Catalog and genre listings of one provider, in declaration order."""

    catalog: tuple[CatalogEntry, ...] = DEFAULT_CATALOG
    genres: tuple[GenreEntry, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "catalog": [entry.to_dict() for entry in self.catalog],
            "genres": [entry.to_dict() for entry in self.genres],
        }
