"""Resolves a provider's current base URL.

Provider sites move domains often, so the URL is looked up at call time:
static overrides from config first, then an optional remote JSON map of
the form ``{"<provider>": {"url": "https://..."}}``.
"""

from __future__ import annotations

import time
from collections.abc import Mapping

import httpx
import structlog

log = structlog.get_logger(__name__)


class BaseUrlResolver:
    """Async callable: ``await get_base_url("vega") -> "https://..."``.

    Returns ``""`` when no URL is known.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        source_url: str | None = None,
        overrides: Mapping[str, str] | None = None,
        ttl_seconds: float = 3600.0,
    ) -> None:
        self._http = http_client
        self._source_url = source_url
        self._overrides = dict(overrides or {})
        self._ttl = ttl_seconds
        self._remote: dict[str, str] = {}
        self._fetched_at: float | None = None

    async def __call__(self, provider_id: str) -> str:
        override = self._overrides.get(provider_id)
        if override:
            return override.rstrip("/")

        if not self._source_url:
            log.debug("base_url_unknown", provider=provider_id)
            return ""

        remote = await self._remote_map()
        url = remote.get(provider_id, "")
        if not url:
            log.warning("base_url_not_in_source", provider=provider_id)
        return url

    async def _remote_map(self) -> dict[str, str]:
        now = time.monotonic()
        if self._fetched_at is not None and (now - self._fetched_at) < self._ttl:
            return self._remote

        assert self._source_url is not None  # noqa: S101
        try:
            resp = await self._http.get(self._source_url, timeout=15)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            log.warning(
                "base_url_source_fetch_failed",
                url=self._source_url,
                error=str(e),
            )
            return self._remote
        except ValueError:
            log.warning("base_url_source_invalid_json", url=self._source_url)
            return self._remote

        if not isinstance(data, dict):
            log.warning("base_url_source_not_a_mapping", url=self._source_url)
            return self._remote

        remote: dict[str, str] = {}
        for name, entry in data.items():
            url = entry.get("url") if isinstance(entry, dict) else entry
            if isinstance(url, str) and url:
                remote[name] = url.rstrip("/")

        self._remote = remote
        self._fetched_at = now
        log.debug("base_url_source_refreshed", count=len(remote))
        return remote
