"""GoFile extractor: resolves share links to direct download links.

Share URLs follow the pattern ``https://gofile.io/d/{contentId}``.

Resolution needs an ephemeral guest token:
    POST https://api.gofile.io/accounts → {"status": "ok", "data": {"token": "..."}}

File links are listed by:
    GET https://api.gofile.io/contents/{contentId}
    (Bearer token auth; the token must also be sent as ``accountToken`` cookie
    when downloading)
"""

from __future__ import annotations

import re
import time
from urllib.parse import urlparse

import httpx
import structlog

from provgate.domain.entities.stream import StreamLink, guess_stream_type

log = structlog.get_logger(__name__)

_CONTENT_ID_RE = re.compile(r"^/d/([A-Za-z0-9]+)/?$")

_API_BASE = "https://api.gofile.io"
_SITE_HEADERS = {"Origin": "https://gofile.io", "Referer": "https://gofile.io/"}

# GoFile tokens last ~30 min
_TOKEN_TTL = 25 * 60


def extract_content_id(url: str) -> str | None:
    """Extract the content ID from a GoFile URL."""
    parsed = urlparse(url)
    hostname = parsed.hostname or ""
    if "gofile" not in hostname:
        return None
    match = _CONTENT_ID_RE.search(parsed.path)
    return match.group(1) if match else None


class GoFileExtractor:
    """Lists the files of a GoFile share via the content API."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client
        self._token: str | None = None
        self._token_ts: float = 0.0

    @property
    def name(self) -> str:
        return "gofile"

    async def _get_guest_token(self) -> str | None:
        now = time.monotonic()
        if self._token and (now - self._token_ts) < _TOKEN_TTL:
            return self._token

        try:
            resp = await self._http.post(
                f"{_API_BASE}/accounts", json={}, headers=_SITE_HEADERS, timeout=15
            )
        except httpx.HTTPError:
            log.warning("gofile_token_request_failed")
            return None

        if resp.status_code != 200:
            log.warning("gofile_token_http_error", status=resp.status_code)
            return None

        try:
            data = resp.json()
        except ValueError:
            log.warning("gofile_token_invalid_json")
            return None

        token = (data.get("data") or {}).get("token") if data.get("status") == "ok" else None
        if not token:
            log.warning("gofile_token_missing", status=data.get("status"))
            return None

        self._token = token
        self._token_ts = now
        return token

    async def extract(self, url: str) -> list[StreamLink]:
        content_id = extract_content_id(url)
        if not content_id:
            log.warning("gofile_invalid_url", url=url)
            return []

        token = await self._get_guest_token()
        if not token:
            return []

        try:
            resp = await self._http.get(
                f"{_API_BASE}/contents/{content_id}",
                headers={**_SITE_HEADERS, "Authorization": f"Bearer {token}"},
                timeout=15,
            )
        except httpx.HTTPError:
            log.warning("gofile_request_failed", content_id=content_id)
            return []

        if resp.status_code != 200:
            log.info("gofile_http_error", status=resp.status_code, content_id=content_id)
            return []

        try:
            data = resp.json()
        except ValueError:
            log.warning("gofile_invalid_json", content_id=content_id)
            return []

        if data.get("status") != "ok":
            log.info("gofile_content_offline", content_id=content_id, status=data.get("status"))
            return []

        content = data.get("data") or {}
        children = content.get("children") or {}
        # A direct file link resolves to the file itself rather than a folder.
        files = children.values() if children else [content]

        links: list[StreamLink] = []
        for entry in files:
            if not isinstance(entry, dict) or entry.get("type", "file") != "file":
                continue
            link = entry.get("link")
            if not link:
                continue
            links.append(
                StreamLink(
                    server=self.name,
                    link=link,
                    type=guess_stream_type(entry.get("name") or link),
                    headers={"Cookie": f"accountToken={token}"},
                )
            )

        log.debug("gofile_extracted", content_id=content_id, count=len(links))
        return links
