"""Port for provider discovery."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from provgate.domain.providers.base import ProviderInfo


@runtime_checkable
class ProviderRegistryPort(Protocol):
    """Synchronous, uncached view of the providers present on disk."""

    def list_providers(self) -> list[str]: ...
    def exists(self, provider_id: str) -> bool: ...
    def get(self, provider_id: str) -> ProviderInfo: ...
    def build_timestamp(self) -> datetime | None: ...
