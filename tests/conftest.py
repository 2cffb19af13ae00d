"""Shared test fixtures for the provgate test suite."""

from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from provgate.application import (
    CapabilityDispatcher,
    ExecutionContextBuilder,
    Executor,
    ProviderEngine,
)
from provgate.infrastructure.catalog import CatalogMetadataReader
from provgate.infrastructure.providers import (
    FilesystemProviderRegistry,
    ProviderModuleLoader,
)

# ---------------------------------------------------------------------------
# Stub provider sources
# ---------------------------------------------------------------------------

DEMO_POSTS = """\
async def list_posts(*, filter, page, provider_value, signal, provider_context, **_):
    return [
        {"title": "A", "link": "/a", "image": "a.jpg"},
        {"title": "B", "link": "/b", "image": "b.jpg"},
        {"title": "C", "link": "/c", "image": "c.jpg"},
    ]


async def search_posts(*, search_query, page, **_):
    return [{"title": search_query, "link": f"/s/{page}", "image": ""}]
"""

DEMO_CATALOG = """\
export const catalog = [
  { title: "Home", filter: "" },
  { title: "Movies", filter: "/movies" },
];

export const genres = [
  { title: "Action", filter: "/genre/action" },
  { title: "Drama", filter: "/genre/drama" },
];
"""


def _write_module(dist_dir: Path, provider: str, group: str, code: str) -> Path:
    """Write a compiled provider module ``<dist>/<provider>/<group>.py``."""
    path = dist_dir / provider / f"{group}.py"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(code), encoding="utf-8")
    return path


def _write_catalog(source_dir: Path, provider: str, text: str) -> Path:
    path = source_dir / provider / "catalog.ts"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Directory fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def dist_dir(tmp_path: Path) -> Path:
    path = tmp_path / "dist"
    path.mkdir()
    return path


@pytest.fixture()
def source_dir(tmp_path: Path) -> Path:
    path = tmp_path / "providers"
    path.mkdir()
    return path


@pytest.fixture()
def manifest_path(tmp_path: Path) -> Path:
    return tmp_path / "manifest.json"


@pytest.fixture()
def write_provider(dist_dir: Path) -> Callable[[str, str, str], Path]:
    """``write_provider(provider, group, code)`` writes a compiled module."""

    def _write(provider: str, group: str, code: str) -> Path:
        return _write_module(dist_dir, provider, group, code)

    return _write


@pytest.fixture()
def write_source(source_dir: Path) -> Callable[[str, str], Path]:
    """``write_source(provider, text)`` writes the provider's catalog source."""

    def _write(provider: str, text: str) -> Path:
        return _write_catalog(source_dir, provider, text)

    return _write


@pytest.fixture()
def demo_provider(dist_dir: Path, source_dir: Path) -> str:
    """A provider with posts only (no meta/stream/episodes modules)."""
    _write_module(dist_dir, "demo", "posts", DEMO_POSTS)
    _write_catalog(source_dir, "demo", DEMO_CATALOG)
    return "demo"


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def provider_context() -> dict[str, Any]:
    """Stand-in helper bundle; the engine only passes it through."""
    return {"name": "test-context"}


@pytest.fixture()
def registry(
    dist_dir: Path, source_dir: Path, manifest_path: Path
) -> FilesystemProviderRegistry:
    return FilesystemProviderRegistry(
        dist_dir=dist_dir, source_dir=source_dir, manifest_path=manifest_path
    )


@pytest.fixture()
def loader(dist_dir: Path) -> ProviderModuleLoader:
    return ProviderModuleLoader(dist_dir=dist_dir)


@pytest.fixture()
def engine(
    registry: FilesystemProviderRegistry,
    loader: ProviderModuleLoader,
    source_dir: Path,
    provider_context: dict[str, Any],
) -> ProviderEngine:
    return ProviderEngine(
        registry=registry,
        catalog_reader=CatalogMetadataReader(source_dir),
        dispatcher=CapabilityDispatcher(loader),
        context_builder=ExecutionContextBuilder(provider_context),
        executor=Executor(),
    )
