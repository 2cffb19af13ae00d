"""Video URL extraction from JWPlayer/XFS-style embed pages.

Shared by the hoster extractors: unpacks Dean Edwards packed JavaScript
and searches the page (or the unpacked script) for HLS/MP4 sources.
"""

from __future__ import annotations

import re

_PACKED_START = re.compile(
    r"eval\s*\(\s*function\s*\(\s*p\s*,\s*a\s*,\s*c\s*,\s*k\s*,\s*e\s*,\s*d\s*\)"
)
_PACKED_ARGS = re.compile(
    r"}\('(.*?)',\s*(\d+),\s*(\d+),\s*'([^']*)'\s*\.split\('\|'\)",
    re.DOTALL,
)
_JWPLAYER_SOURCES = re.compile(
    r"""sources\s*:\s*\[\s*\{[^}]*file\s*:\s*["'](https?://[^"']+\.(?:m3u8|mp4)[^"']*)"""
)
_FILE_PROPERTY = re.compile(
    r"""(?:file|source|src)\s*[:=]\s*["'](https?://[^"']+\.(?:m3u8|mp4)[^"']*)"""
)
_HTML5_SOURCE = re.compile(r"""<(?:source|video)[^>]+src\s*=\s*["'](https?://[^"']+)""")
_QUOTED_VIDEO_URL = re.compile(r"""["'](https?://[^"']+\.(?:m3u8|mp4)[^"']*)["']""")
_LABEL = re.compile(r"""label\s*:\s*["'](\d{3,4})p?["']""")


def unpack_packed_js(packed: str) -> str | None:
    """Unpack ``eval(function(p,a,c,k,e,d){...}('payload',base,count,'dict'.split('|')))``."""
    match = _PACKED_ARGS.search(packed)
    if not match:
        return None

    payload = match.group(1)
    base = int(match.group(2))
    count = int(match.group(3))
    keywords = match.group(4).split("|")
    if base < 2 or base > 36:
        return None
    if len(keywords) < count:
        keywords.extend([""] * (count - len(keywords)))

    def _replace(m: re.Match[str]) -> str:
        word = m.group(0)
        try:
            index = int(word, base)
        except ValueError:
            return word
        if index < len(keywords) and keywords[index]:
            return keywords[index]
        return word

    return re.sub(r"\b\w+\b", _replace, payload)


def _usable(url: str) -> bool:
    lowered = url.lower()
    return "thumbnail" not in lowered and "track" not in lowered


def _search_sources(text: str) -> str | None:
    normalized = text.replace("\\'", "'").replace('\\"', '"')
    for pattern in (_JWPLAYER_SOURCES, _FILE_PROPERTY):
        m = pattern.search(normalized)
        if m and _usable(m.group(1)):
            return m.group(1)
    return None


def extract_video_url(html: str) -> str | None:
    """Return the first playable video URL in an embed page, or ``None``.

    Order: packed JS blocks, JWPlayer sources in the page, HTML5
    ``<source>``/``<video>`` tags, then any quoted HLS/MP4 URL.
    """
    for pm in _PACKED_START.finditer(html):
        unpacked = unpack_packed_js(html[pm.start() : pm.start() + 65536])
        if unpacked:
            url = _search_sources(unpacked)
            if url:
                return url

    url = _search_sources(html)
    if url:
        return url

    m = _HTML5_SOURCE.search(html)
    if m and _usable(m.group(1)):
        return m.group(1)

    m = _QUOTED_VIDEO_URL.search(html)
    if m and _usable(m.group(1)):
        return m.group(1)

    return None


def extract_quality_label(html: str) -> str | None:
    """JWPlayer ``label: "720p"`` → ``"720"``."""
    m = _LABEL.search(html)
    return m.group(1) if m else None
