"""Shared httpx client factory."""

from __future__ import annotations

import httpx

from provgate.infrastructure.config.schema import AppConfig

from .headers import DEFAULT_USER_AGENT


def create_http_client(config: AppConfig) -> httpx.AsyncClient:
    """One client per process; closed by the FastAPI lifespan."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent or DEFAULT_USER_AGENT},
        follow_redirects=config.http_follow_redirects,
    )
