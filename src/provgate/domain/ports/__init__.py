from .catalog_reader import CatalogReaderPort
from .content_extractor import ContentExtractorPort
from .module_loader import ModuleLoaderPort
from .provider_registry import ProviderRegistryPort

__all__ = [
    "CatalogReaderPort",
    "ContentExtractorPort",
    "ModuleLoaderPort",
    "ProviderRegistryPort",
]
