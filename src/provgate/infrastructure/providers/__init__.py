from .loader import ProviderModuleLoader
from .registry import FilesystemProviderRegistry, is_valid_provider_id

__all__ = [
    "FilesystemProviderRegistry",
    "ProviderModuleLoader",
    "is_valid_provider_id",
]
