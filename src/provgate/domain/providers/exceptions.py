"""Provider engine exceptions.

Every exception carries a ``kind`` string that survives into the
structured failure result handed to the transport layer.
"""

from __future__ import annotations


class ProviderError(Exception):
    """Base class for all provider-engine errors."""

    kind: str = "ProviderError"


class ProviderNotFoundError(ProviderError):
    """Raised when a provider id has no compiled artifact directory."""

    kind = "ProviderNotFound"


class ProviderModuleNotFoundError(ProviderError):
    """Raised when no compiled artifact exists for a (provider, group) pair."""

    kind = "ModuleNotFound"


class ProviderModuleLoadError(ProviderError):
    """Raised when a compiled artifact exists but fails to load."""

    kind = "ModuleLoadError"


class UnknownCapabilityError(ProviderError):
    """Raised when a capability name is outside the fixed capability set."""

    kind = "UnknownCapability"


class CapabilityNotSupportedError(ProviderError):
    """Raised when a loaded module does not export the bound function."""

    kind = "CapabilityNotSupported"


class ProviderExecutionError(ProviderError):
    """Raised when the provider's own logic fails during execution."""

    kind = "ProviderExecutionFailed"


class OperationCancelledError(ProviderError):
    """Raised by ``CancellationSignal.raise_if_cancelled()``."""

    kind = "ProviderExecutionFailed"
