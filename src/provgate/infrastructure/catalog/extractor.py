"""Lenient extraction of catalog/genre declarations from provider sources.

The source artifact is not guaranteed to be uniformly formatted, so every
failure degrades to an empty field (and, for the catalog, to the default
two-entry catalog) instead of raising.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import structlog

from provgate.domain.entities.catalog import (
    DEFAULT_CATALOG,
    CatalogEntry,
    GenreEntry,
    ProviderCatalog,
)
from provgate.infrastructure.providers.registry import is_valid_provider_id

from .literal_parser import LiteralParseError, parse_record_array

log = structlog.get_logger(__name__)

_EntryT = TypeVar("_EntryT", CatalogEntry, GenreEntry)


def _declaration_pattern(name: str) -> re.Pattern[str]:
    # export const catalog: Catalog[] = [ ...   |   catalog: list[dict] = [ ...
    return re.compile(
        rf"^[ \t]*(?:export[ \t]+)?(?:(?:const|let|var)[ \t]+)?{name}\b"
        r"[ \t]*(?::[^=\n]*)?=[ \t]*(?=\[)",
        re.MULTILINE,
    )


_CATALOG_DECL = _declaration_pattern("catalog")
_GENRES_DECL = _declaration_pattern("genres")


class _EntryError(ValueError):
    pass


def _to_entry(record: dict[str, Any], factory: Callable[..., _EntryT]) -> _EntryT:
    title = record.get("title")
    if title is None or title == "":
        raise _EntryError("entry without title")
    raw_filter = record.get("filter")
    return factory(
        title=str(title),
        filter="" if raw_filter is None else str(raw_filter),
    )


def _extract_field(
    source_text: str,
    pattern: re.Pattern[str],
    field_name: str,
    factory: Callable[..., _EntryT],
) -> tuple[_EntryT, ...]:
    match = pattern.search(source_text)
    if match is None:
        log.debug("catalog_declaration_missing", field=field_name)
        return ()

    try:
        records, _ = parse_record_array(source_text, match.end())
        return tuple(_to_entry(record, factory) for record in records)
    except (LiteralParseError, _EntryError) as e:
        log.warning(
            "catalog_metadata_parse_failed",
            field=field_name,
            error_type=type(e).__name__,
            error_message=str(e),
        )
        return ()


def extract_catalog_metadata(source_text: str) -> ProviderCatalog:
    """Extract the ``catalog`` and ``genres`` declarations from *source_text*.

    Never raises. An empty or unrecoverable catalog is replaced with
    ``DEFAULT_CATALOG``; genres have no default.
    """
    catalog = _extract_field(source_text, _CATALOG_DECL, "catalog", CatalogEntry)
    genres = _extract_field(source_text, _GENRES_DECL, "genres", GenreEntry)
    return ProviderCatalog(catalog=catalog or DEFAULT_CATALOG, genres=genres)


class CatalogMetadataReader:
    """Reads ``<source_dir>/<provider>/<catalog_filename>`` on every call."""

    def __init__(self, source_dir: Path, catalog_filename: str = "catalog.ts") -> None:
        self._source_dir = source_dir
        self._catalog_filename = catalog_filename

    @property
    def source_dir(self) -> Path:
        return self._source_dir

    def source_path(self, provider_id: str) -> Path:
        return self._source_dir / provider_id / self._catalog_filename

    def read(self, provider_id: str) -> ProviderCatalog:
        if not is_valid_provider_id(provider_id):
            log.warning("catalog_invalid_provider_id", provider=provider_id)
            return ProviderCatalog()

        path = self.source_path(provider_id)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            log.debug("catalog_source_missing", provider=provider_id, path=str(path))
            return ProviderCatalog()
        except (OSError, UnicodeDecodeError) as e:
            log.warning(
                "catalog_source_unreadable",
                provider=provider_id,
                path=str(path),
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return ProviderCatalog()

        return extract_catalog_metadata(text)
