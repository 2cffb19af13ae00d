"""Header presets shared with every provider call."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/131.0.0.0 Safari/537.36"
)

COMMON_HEADERS: Mapping[str, str] = MappingProxyType(
    {
        "User-Agent": DEFAULT_USER_AGENT,
        "Accept": (
            "text/html,application/xhtml+xml,application/xml;q=0.9,"
            "image/avif,image/webp,*/*;q=0.8"
        ),
        "Accept-Language": "en-US,en;q=0.5",
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
        "Upgrade-Insecure-Requests": "1",
    }
)


def with_referer(url: str, base: Mapping[str, str] = COMMON_HEADERS) -> dict[str, str]:
    """Copy of *base* with ``Referer`` set to *url*."""
    return {**base, "Referer": url}
