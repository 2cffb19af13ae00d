from .extractor import CatalogMetadataReader, extract_catalog_metadata
from .literal_parser import LiteralParseError, parse_record_array

__all__ = [
    "CatalogMetadataReader",
    "LiteralParseError",
    "extract_catalog_metadata",
    "parse_record_array",
]
