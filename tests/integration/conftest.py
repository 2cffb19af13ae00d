"""Shared fixtures for integration tests.

These tests run the real application (lifespan, engine, loader, registry)
against compiled provider modules written to tmp_path.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from provgate.infrastructure.config import AppConfig
from provgate.interfaces.app import create_app


@pytest.fixture()
def app_config(dist_dir: Path, source_dir: Path, manifest_path: Path) -> AppConfig:
    """Config pointing every directory at tmp_path, with a stub base URL."""
    return AppConfig(
        environment="test",
        dist_dir=dist_dir,
        source_dir=source_dir,
        manifest_path=manifest_path,
        execution_timeout_seconds=5.0,
        base_urls={"overrides": {"demo": "https://demo.example/"}},
    )


@pytest.fixture()
def client(app_config: AppConfig, demo_provider: str) -> Iterator[TestClient]:
    """TestClient with the lifespan running (real composition root)."""
    with TestClient(create_app(app_config, port=4010)) as test_client:
        yield test_client
