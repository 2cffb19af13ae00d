"""Process-wide helper bundle passed to every provider call."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

import httpx

from provgate.domain.ports.content_extractor import ContentExtractorPort
from provgate.infrastructure.extractors import create_extractors
from provgate.infrastructure.http.headers import COMMON_HEADERS

from .base_url import BaseUrlResolver
from .html import HtmlQuery


@dataclass(frozen=True)
class ProviderContext:
    """Read-only toolkit every provider receives as ``provider_context``.

    Created once at startup and shared by reference across concurrent
    requests.
    """

    http_client: httpx.AsyncClient
    get_base_url: Callable[[str], Awaitable[str]]
    common_headers: Mapping[str, str]
    html: HtmlQuery
    extractors: Mapping[str, ContentExtractorPort]

    def extractor(self, name: str) -> ContentExtractorPort | None:
        return self.extractors.get(name)


def build_provider_context(
    http_client: httpx.AsyncClient,
    *,
    base_url_source: str | None = None,
    base_url_overrides: Mapping[str, str] | None = None,
    base_url_ttl_seconds: float = 3600.0,
    extractors: Mapping[str, ContentExtractorPort] | None = None,
) -> ProviderContext:
    if extractors is None:
        extractors = create_extractors(http_client)
    return ProviderContext(
        http_client=http_client,
        get_base_url=BaseUrlResolver(
            http_client,
            source_url=base_url_source,
            overrides=base_url_overrides,
            ttl_seconds=base_url_ttl_seconds,
        ),
        common_headers=COMMON_HEADERS,
        html=HtmlQuery(),
        extractors=MappingProxyType(dict(extractors)),
    )
