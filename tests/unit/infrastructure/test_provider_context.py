"""Tests for the shared helper bundle handed to providers."""

from __future__ import annotations

from types import MappingProxyType

import httpx
import pytest

from provgate.infrastructure.context import build_provider_context
from provgate.infrastructure.extractors import GoFileExtractor, SuperVideoExtractor


class TestBuildProviderContext:
    async def test_default_extractors(self) -> None:
        async with httpx.AsyncClient() as client:
            context = build_provider_context(client)

            assert sorted(context.extractors) == ["gofile", "supervideo"]
            assert isinstance(context.extractor("gofile"), GoFileExtractor)
            assert isinstance(context.extractor("supervideo"), SuperVideoExtractor)

    @pytest.mark.parametrize("name", ["hubcloud", "gdflix"])
    async def test_unavailable_extractor_is_none(self, name: str) -> None:
        async with httpx.AsyncClient() as client:
            assert build_provider_context(client).extractor(name) is None

    async def test_extractors_are_read_only(self) -> None:
        async with httpx.AsyncClient() as client:
            context = build_provider_context(client)
            assert isinstance(context.extractors, MappingProxyType)
            with pytest.raises(TypeError):
                context.extractors["other"] = context.extractors["gofile"]  # type: ignore[index]

    async def test_base_url_override(self) -> None:
        async with httpx.AsyncClient() as client:
            context = build_provider_context(
                client, base_url_overrides={"vega": "https://vega.example/"}
            )
            assert await context.get_base_url("vega") == "https://vega.example"
            assert context.http_client is client
