"""Engine facade: the single entry point the transport layer talks to."""

from __future__ import annotations

import time
from collections.abc import Mapping
from datetime import datetime
from typing import Any

import structlog

from provgate.domain.entities.catalog import ProviderCatalog
from provgate.domain.entities.execution import Capability, InvocationResult
from provgate.domain.ports import CatalogReaderPort, ProviderRegistryPort
from provgate.domain.providers import ProviderError

from .context_builder import ExecutionContextBuilder
from .dispatcher import CapabilityDispatcher
from .executor import Executor

log = structlog.get_logger(__name__)


class ProviderEngine:
    """Resolves catalogs, lists providers and invokes provider capabilities.

    Flow of ``invoke``:
        1. Validate the capability name (independent of the provider)
        2. Check the registry (no module load for unknown providers)
        3. Dispatch: fresh module load, export lookup
        4. Build the per-request execution context
        5. Execute and normalize the outcome

    Every engine error is returned as a failure result; nothing propagates
    to the caller.
    """

    def __init__(
        self,
        registry: ProviderRegistryPort,
        catalog_reader: CatalogReaderPort,
        dispatcher: CapabilityDispatcher,
        context_builder: ExecutionContextBuilder,
        executor: Executor,
    ) -> None:
        self._registry = registry
        self._catalog_reader = catalog_reader
        self._dispatcher = dispatcher
        self._context_builder = context_builder
        self._executor = executor

    def resolve_catalog(self, provider_id: str) -> ProviderCatalog:
        return self._catalog_reader.read(provider_id)

    def list_available_providers(self) -> list[str]:
        return self._registry.list_providers()

    def build_timestamp(self) -> datetime | None:
        return self._registry.build_timestamp()

    async def invoke(
        self,
        provider_id: str,
        capability_name: Capability | str,
        params: Mapping[str, Any] | None = None,
    ) -> InvocationResult:
        start = time.perf_counter()
        try:
            capability = Capability.parse(capability_name)
            self._registry.get(provider_id)
            fn = self._dispatcher.resolve(provider_id, capability)
        except ProviderError as e:
            log.info(
                "provider_invocation_rejected",
                provider=provider_id,
                capability=str(capability_name),
                kind=e.kind,
                error=str(e),
            )
            return InvocationResult.from_error(e)

        context = self._context_builder.build(params, provider_id, capability)
        result = await self._executor.execute(fn, context)

        log.info(
            "provider_invoked",
            provider=provider_id,
            capability=capability.value,
            ok=result.ok,
            duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
        )
        return result
