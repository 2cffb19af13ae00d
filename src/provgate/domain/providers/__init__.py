from .base import (
    RESERVED_PARAM_KEYS,
    CancellationSignal,
    ExecutionContext,
    ModuleHandle,
    ProviderFunction,
    ProviderInfo,
)
from .exceptions import (
    CapabilityNotSupportedError,
    OperationCancelledError,
    ProviderError,
    ProviderExecutionError,
    ProviderModuleLoadError,
    ProviderModuleNotFoundError,
    ProviderNotFoundError,
    UnknownCapabilityError,
)

__all__ = [
    "RESERVED_PARAM_KEYS",
    "CancellationSignal",
    "CapabilityNotSupportedError",
    "ExecutionContext",
    "ModuleHandle",
    "OperationCancelledError",
    "ProviderError",
    "ProviderExecutionError",
    "ProviderFunction",
    "ProviderInfo",
    "ProviderModuleLoadError",
    "ProviderModuleNotFoundError",
    "ProviderNotFoundError",
    "UnknownCapabilityError",
]
