from .catalog import DEFAULT_CATALOG, CatalogEntry, GenreEntry, ProviderCatalog
from .execution import (
    CAPABILITY_BINDINGS,
    Capability,
    CapabilityBinding,
    ErrorInfo,
    InvocationResult,
    ModuleGroup,
    capabilities_in,
)
from .stream import StreamLink, guess_stream_type

__all__ = [
    "CAPABILITY_BINDINGS",
    "Capability",
    "CapabilityBinding",
    "CatalogEntry",
    "DEFAULT_CATALOG",
    "ErrorInfo",
    "GenreEntry",
    "InvocationResult",
    "ModuleGroup",
    "ProviderCatalog",
    "StreamLink",
    "capabilities_in",
    "guess_stream_type",
]
