"""SuperVideo extractor: XFS-based embed pages.

SuperVideo uses the XFileSharingPro framework which embeds video URLs via
JWPlayer sources (often inside packed JavaScript) or HTML5 video tags.
"""

from __future__ import annotations

import re
from urllib.parse import urlparse

import httpx
import structlog

from provgate.domain.entities.stream import StreamLink, guess_stream_type
from provgate.infrastructure.http.headers import with_referer

from ._video_extract import extract_quality_label, extract_video_url

log = structlog.get_logger(__name__)

_FILE_ID_RE = re.compile(r"/(?:e/|d/|v/|embed-)?([a-z0-9]{12})(?:[/.-]|$)")
_CF_MARKERS = ("Just a moment", "challenge-platform", "cf-error-details")


def is_cloudflare_block(status_code: int, html: str) -> bool:
    if status_code not in (403, 503):
        return False
    return any(marker in html for marker in _CF_MARKERS)


def normalize_embed_url(url: str) -> str:
    """Rewrite any SuperVideo page URL to the ``/e/{id}`` embed form."""
    if "/e/" in url:
        return url
    parsed = urlparse(url)
    id_match = _FILE_ID_RE.search(parsed.path)
    if not id_match:
        return url
    domain = parsed.hostname or "supervideo.cc"
    return f"https://{domain}/e/{id_match.group(1)}"


class SuperVideoExtractor:
    """Fetches a SuperVideo embed page and pulls out the video source."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    @property
    def name(self) -> str:
        return "supervideo"

    async def extract(self, url: str) -> list[StreamLink]:
        embed_url = normalize_embed_url(url)
        try:
            resp = await self._http.get(
                embed_url,
                headers=with_referer(embed_url),
                follow_redirects=True,
                timeout=15,
            )
        except httpx.HTTPError:
            log.warning("supervideo_request_failed", url=embed_url)
            return []

        html = resp.text
        if is_cloudflare_block(resp.status_code, html):
            log.info("supervideo_cloudflare_detected", status=resp.status_code, url=embed_url)
            return []
        if resp.status_code != 200:
            log.warning("supervideo_http_error", status=resp.status_code, url=embed_url)
            return []
        if 'class="fake-signup"' in html:
            log.info("supervideo_offline", url=embed_url)
            return []

        video_url = extract_video_url(html)
        if not video_url:
            log.warning("supervideo_extraction_failed", url=embed_url)
            return []

        return [
            StreamLink(
                server=self.name,
                link=video_url,
                type=guess_stream_type(video_url),
                quality=extract_quality_label(html),
                headers={"Referer": embed_url},
            )
        ]
