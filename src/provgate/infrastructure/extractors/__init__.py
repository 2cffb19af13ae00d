"""Content extractors for known hosting backends."""

from __future__ import annotations

import httpx

from provgate.domain.ports.content_extractor import ContentExtractorPort

from .gofile import GoFileExtractor
from .supervideo import SuperVideoExtractor


def create_extractors(http_client: httpx.AsyncClient) -> dict[str, ContentExtractorPort]:
    """Instantiate every extractor, keyed by name."""
    extractors: list[ContentExtractorPort] = [
        GoFileExtractor(http_client),
        SuperVideoExtractor(http_client),
    ]
    return {extractor.name: extractor for extractor in extractors}


__all__ = [
    "GoFileExtractor",
    "SuperVideoExtractor",
    "create_extractors",
]
