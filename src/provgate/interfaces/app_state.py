"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from provgate.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from provgate.application import ProviderEngine
    from provgate.infrastructure.build import BuildRunner
    from provgate.infrastructure.context import ProviderContext
    from provgate.infrastructure.providers import (
        FilesystemProviderRegistry,
        ProviderModuleLoader,
    )


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig
    port: int

    # Infrastructure
    http_client: httpx.AsyncClient
    provider_context: ProviderContext
    registry: FilesystemProviderRegistry
    loader: ProviderModuleLoader

    # Application services
    engine: ProviderEngine
    build_runner: BuildRunner
