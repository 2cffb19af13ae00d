from __future__ import annotations

from .client import create_http_client
from .headers import COMMON_HEADERS, DEFAULT_USER_AGENT, with_referer

__all__ = [
    "COMMON_HEADERS",
    "DEFAULT_USER_AGENT",
    "create_http_client",
    "with_referer",
]
