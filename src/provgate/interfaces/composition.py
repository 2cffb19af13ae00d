"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import structlog
from fastapi import FastAPI

from provgate.application import (
    CapabilityDispatcher,
    ExecutionContextBuilder,
    Executor,
    ProviderEngine,
)
from provgate.infrastructure.build import BuildRunner
from provgate.infrastructure.catalog import CatalogMetadataReader
from provgate.infrastructure.context import build_provider_context
from provgate.infrastructure.http import create_http_client
from provgate.infrastructure.providers import (
    FilesystemProviderRegistry,
    ProviderModuleLoader,
)
from provgate.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. HTTP client (required by the helper bundle)
        2. Provider context (helper bundle shared by every call)
        3. Registry + module loader (filesystem views of dist_dir)
        4. Engine (dispatcher, context builder, executor)
        5. Build runner
    """
    state = cast(AppState, app.state)
    config = state.config

    # 1) HTTP client
    state.http_client = create_http_client(config)
    log.info(
        "http_client_initialized",
        timeout_seconds=config.http_timeout_seconds,
        follow_redirects=config.http_follow_redirects,
    )

    # 2) Provider context
    state.provider_context = build_provider_context(
        state.http_client,
        base_url_source=config.base_urls.source_url,
        base_url_overrides=config.base_urls.overrides,
        base_url_ttl_seconds=config.base_urls.ttl_seconds,
    )
    log.info(
        "provider_context_initialized",
        extractors=sorted(state.provider_context.extractors),
    )

    # 3) Registry + loader
    state.registry = FilesystemProviderRegistry(
        dist_dir=config.dist_dir,
        source_dir=config.source_dir,
        manifest_path=config.manifest_path,
    )
    state.loader = ProviderModuleLoader(dist_dir=config.dist_dir)

    # 4) Engine
    state.engine = ProviderEngine(
        registry=state.registry,
        catalog_reader=CatalogMetadataReader(
            source_dir=config.source_dir,
            catalog_filename=config.catalog_filename,
        ),
        dispatcher=CapabilityDispatcher(state.loader),
        context_builder=ExecutionContextBuilder(state.provider_context),
        executor=Executor(timeout_seconds=config.execution_timeout_seconds),
    )
    log.info(
        "provider_engine_initialized",
        dist_dir=str(config.dist_dir),
        source_dir=str(config.source_dir),
        providers=len(state.registry.list_providers()),
        execution_timeout_seconds=config.execution_timeout_seconds,
    )

    # 5) Build runner
    state.build_runner = BuildRunner(
        config.build.command,
        cwd=config.build.cwd,
        timeout_seconds=config.build.timeout_seconds,
    )

    log.info("app_startup_complete")

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")

        log.info("app_shutdown_complete")
