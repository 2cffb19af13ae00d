"""Port for loading provider module groups."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from provgate.domain.entities.execution import ModuleGroup
from provgate.domain.providers.base import ModuleHandle


@runtime_checkable
class ModuleLoaderPort(Protocol):
    """Loads a fresh handle for a (provider, module group) pair on every call."""

    def load(self, provider_id: str, group: ModuleGroup) -> ModuleHandle: ...
    def current(self, provider_id: str, group: ModuleGroup) -> ModuleHandle | None: ...
