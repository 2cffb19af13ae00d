from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from provgate.domain.entities.execution import Capability
from provgate.domain.providers import CancellationSignal, ExecutionContext


class ExecutionContextBuilder:
    """Assembles the per-request context around the shared helper bundle."""

    def __init__(self, provider_context: Any) -> None:
        self._provider_context = provider_context

    def build(
        self,
        params: Mapping[str, Any] | None,
        provider_id: str,
        capability: Capability,
    ) -> ExecutionContext:
        return ExecutionContext(
            provider_id=provider_id,
            capability=capability,
            # Copied so a provider cannot mutate the caller's mapping.
            params=MappingProxyType(dict(params or {})),
            signal=CancellationSignal(),
            provider_context=self._provider_context,
        )
