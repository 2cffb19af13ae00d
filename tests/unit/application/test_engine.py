"""Tests for ProviderEngine (real registry/loader over tmp_path)."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from provgate.application import (
    CapabilityDispatcher,
    ExecutionContextBuilder,
    Executor,
    ProviderEngine,
)
from provgate.domain.entities.catalog import DEFAULT_CATALOG
from provgate.infrastructure.catalog import CatalogMetadataReader
from provgate.infrastructure.providers import (
    FilesystemProviderRegistry,
    ProviderModuleLoader,
)

WriteProvider = Callable[[str, str, str], Path]


class TestInvokeSuccess:
    async def test_list_posts_returns_stub_posts_in_order(
        self, engine: ProviderEngine, demo_provider: str
    ) -> None:
        result = await engine.invoke("demo", "list-posts", {"filter": "", "page": 1})

        assert result.ok
        assert result.data == [
            {"title": "A", "link": "/a", "image": "a.jpg"},
            {"title": "B", "link": "/b", "image": "b.jpg"},
            {"title": "C", "link": "/c", "image": "c.jpg"},
        ]

    async def test_search_posts(self, engine: ProviderEngine, demo_provider: str) -> None:
        result = await engine.invoke(
            "demo", "search-posts", {"search_query": "dune", "page": 2}
        )
        assert result.data == [{"title": "dune", "link": "/s/2", "image": ""}]

    async def test_provider_receives_context(
        self,
        engine: ProviderEngine,
        write_provider: WriteProvider,
        provider_context: dict[str, str],
    ) -> None:
        write_provider(
            "echo",
            "meta",
            """\
            async def get_meta(*, link, provider_value, signal, provider_context):
                return {
                    "link": link,
                    "provider": provider_value,
                    "context": provider_context["name"],
                    "cancelled": signal.cancelled,
                }
            """,
        )
        result = await engine.invoke("echo", "fetch-meta", {"link": "/m/1"})
        assert result.data == {
            "link": "/m/1",
            "provider": "echo",
            "context": "test-context",
            "cancelled": False,
        }

    async def test_rebuild_observed_on_next_invoke(
        self, engine: ProviderEngine, write_provider: WriteProvider
    ) -> None:
        write_provider("p", "meta", "async def get_meta(**kw):\n    return 'old'\n")
        assert (await engine.invoke("p", "fetch-meta", {"link": "x"})).data == "old"

        write_provider("p", "meta", "async def get_meta(**kw):\n    return 'new'\n")
        assert (await engine.invoke("p", "fetch-meta", {"link": "x"})).data == "new"


class TestInvokeFailures:
    async def test_missing_export_is_capability_not_supported(
        self, engine: ProviderEngine, write_provider: WriteProvider
    ) -> None:
        write_provider("p", "meta", "async def something_else(**kw):\n    return {}\n")
        result = await engine.invoke("p", "fetch-meta", {"link": "x"})
        assert result.error is not None
        assert result.error.kind == "CapabilityNotSupported"

    async def test_missing_provider(self, engine: ProviderEngine) -> None:
        result = await engine.invoke("missing-provider", "list-posts", {})
        assert not result.ok
        assert result.error is not None
        assert result.error.kind == "ProviderNotFound"

    async def test_overlong_provider_id_is_not_found(self, engine: ProviderEngine) -> None:
        result = await engine.invoke("a" * 300, "list-posts", {})
        assert result.error is not None
        assert result.error.kind == "ProviderNotFound"

    async def test_unknown_capability_regardless_of_provider(
        self, engine: ProviderEngine, demo_provider: str
    ) -> None:
        for provider in ("demo", "missing-provider"):
            result = await engine.invoke(provider, "getEverything", {})
            assert result.error is not None
            assert result.error.kind == "UnknownCapability"

    async def test_missing_module_group(
        self, engine: ProviderEngine, demo_provider: str
    ) -> None:
        result = await engine.invoke("demo", "fetch-stream", {"link": "x"})
        assert result.error is not None
        assert result.error.kind == "ModuleNotFound"

    async def test_load_error(self, engine: ProviderEngine, write_provider: WriteProvider) -> None:
        write_provider("p", "episodes", "def get_episodes(:\n")
        result = await engine.invoke("p", "fetch-episodes", {"url": "x"})
        assert result.error is not None
        assert result.error.kind == "ModuleLoadError"

    async def test_provider_exception(
        self, engine: ProviderEngine, write_provider: WriteProvider
    ) -> None:
        write_provider(
            "p",
            "stream",
            "async def get_stream(**kw):\n    raise RuntimeError('upstream 502')\n",
        )
        result = await engine.invoke("p", "fetch-stream", {"link": "x", "type": "movie"})
        assert result.error is not None
        assert result.error.to_dict() == {
            "error": "upstream 502",
            "kind": "ProviderExecutionFailed",
        }


class TestOrdering:
    async def test_no_load_for_missing_provider(
        self, registry: FilesystemProviderRegistry, source_dir: Path
    ) -> None:
        loader = MagicMock(spec=ProviderModuleLoader)
        engine = ProviderEngine(
            registry=registry,
            catalog_reader=CatalogMetadataReader(source_dir),
            dispatcher=CapabilityDispatcher(loader),
            context_builder=ExecutionContextBuilder(None),
            executor=Executor(),
        )

        result = await engine.invoke("missing-provider", "list-posts", {})

        assert result.error is not None
        assert result.error.kind == "ProviderNotFound"
        loader.load.assert_not_called()

    async def test_capability_checked_before_registry(self) -> None:
        registry = MagicMock()
        engine = ProviderEngine(
            registry=registry,
            catalog_reader=MagicMock(),
            dispatcher=CapabilityDispatcher(MagicMock()),
            context_builder=ExecutionContextBuilder(None),
            executor=Executor(),
        )
        result = await engine.invoke("demo", "nope", {})
        assert result.error is not None
        assert result.error.kind == "UnknownCapability"
        registry.get.assert_not_called()


class TestCatalogAndListing:
    def test_resolve_catalog(self, engine: ProviderEngine, demo_provider: str) -> None:
        catalog = engine.resolve_catalog("demo")
        assert [e.title for e in catalog.catalog] == ["Home", "Movies"]
        assert [g.title for g in catalog.genres] == ["Action", "Drama"]

    def test_resolve_catalog_twice_identical(
        self, engine: ProviderEngine, demo_provider: str
    ) -> None:
        assert engine.resolve_catalog("demo") == engine.resolve_catalog("demo")

    def test_resolve_catalog_unknown_provider(self, engine: ProviderEngine) -> None:
        catalog = engine.resolve_catalog("unknown")
        assert catalog.catalog == DEFAULT_CATALOG
        assert catalog.genres == ()

    def test_list_available_providers(
        self, engine: ProviderEngine, demo_provider: str, dist_dir: Path
    ) -> None:
        (dist_dir / "another").mkdir()
        assert engine.list_available_providers() == ["another", "demo"]

    def test_build_timestamp(
        self, engine: ProviderEngine, manifest_path: Path
    ) -> None:
        assert engine.build_timestamp() is None
        manifest_path.write_text("[]")
        assert engine.build_timestamp() is not None


@pytest.mark.parametrize(
    ("function", "params"),
    [
        ("getPosts", {"filter": "", "page": 1}),
        ("getSearchPosts", {"search_query": "x", "page": 1}),
    ],
)
async def test_legacy_function_names(
    engine: ProviderEngine, demo_provider: str, function: str, params: dict[str, object]
) -> None:
    result = await engine.invoke("demo", function, params)
    assert result.ok
