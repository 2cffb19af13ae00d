"""Domain models for provider execution."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Any

from .exceptions import OperationCancelledError

if TYPE_CHECKING:
    from provgate.domain.entities.execution import Capability, ModuleGroup

ProviderFunction = Callable[..., Awaitable[Any]]

# Keys the engine injects into every call; caller params never override them.
RESERVED_PARAM_KEYS: frozenset[str] = frozenset(
    {"provider_value", "signal", "provider_context"}
)


class CancellationSignal:
    """Advisory per-request cancellation flag.

    The engine hands one fresh signal to every provider call. Providers may
    poll ``cancelled``, await ``wait()`` or call ``raise_if_cancelled()``
    between network round-trips.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: str | None = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        if self._event.is_set():
            return
        self._reason = reason
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise OperationCancelledError(self._reason or "operation cancelled")


@dataclass(frozen=True)
class ProviderInfo:
    """A provider observed on disk."""

    provider_id: str
    dist_path: Path
    source_path: Path


@dataclass(frozen=True)
class ModuleHandle:
    """One loaded version of a provider's compiled module group.

    ``provides`` is fixed at load time: the capabilities of the group whose
    export exists on the module and is callable.
    """

    provider_id: str
    group: ModuleGroup
    version: int
    path: Path
    module: ModuleType
    loaded_at: datetime
    provides: frozenset[Capability] = field(default_factory=frozenset)

    def implementation(self, capability: Capability) -> ProviderFunction | None:
        """Return the bound export, or ``None`` when not implemented."""
        if capability not in self.provides:
            return None
        return getattr(self.module, capability.export_name)


@dataclass(frozen=True)
class ExecutionContext:
    """Ephemeral per-request parameter object."""

    provider_id: str
    capability: Capability
    params: Mapping[str, Any]
    signal: CancellationSignal
    provider_context: Any

    def as_kwargs(self) -> dict[str, Any]:
        """Flatten into the keyword arguments every provider function takes."""
        kwargs = {k: v for k, v in self.params.items() if k not in RESERVED_PARAM_KEYS}
        kwargs["provider_value"] = self.provider_id
        kwargs["signal"] = self.signal
        kwargs["provider_context"] = self.provider_context
        return kwargs

