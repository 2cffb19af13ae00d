"""Maps an abstract capability onto a provider's concrete function."""

from __future__ import annotations

from provgate.domain.entities.execution import Capability
from provgate.domain.ports.module_loader import ModuleLoaderPort
from provgate.domain.providers import CapabilityNotSupportedError, ProviderFunction


class CapabilityDispatcher:
    """Resolves ``(provider, capability)`` to a callable from a fresh load."""

    def __init__(self, loader: ModuleLoaderPort) -> None:
        self._loader = loader

    def resolve(self, provider_id: str, capability: Capability | str) -> ProviderFunction:
        """Return the provider's implementation of *capability*.

        Raises:
            UnknownCapabilityError: *capability* is not a known name.
            ProviderModuleNotFoundError: The module group has no artifact.
            ProviderModuleLoadError: The artifact failed to load.
            CapabilityNotSupportedError: The module lacks the bound export.
        """
        cap = Capability.parse(capability)
        handle = self._loader.load(provider_id, cap.group)
        fn = handle.implementation(cap)
        if fn is None:
            raise CapabilityNotSupportedError(
                f"Provider '{provider_id}' does not implement {cap.value} "
                f"({cap.group.value}.{cap.export_name})"
            )
        return fn
