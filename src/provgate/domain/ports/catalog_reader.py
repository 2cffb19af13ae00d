"""Port for reading a provider's declarative catalog metadata."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from provgate.domain.entities.catalog import ProviderCatalog


@runtime_checkable
class CatalogReaderPort(Protocol):
    def read(self, provider_id: str) -> ProviderCatalog: ...
