"""Stream link value object returned by content extractors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

StreamType = Literal["m3u8", "mp4", "mkv", "unknown"]


@dataclass(frozen=True)
class StreamLink:
    """A playable link produced by a hosting-backend extractor."""

    server: str  # extractor name, e.g. "gofile"
    link: str
    type: StreamType = "unknown"
    quality: str | None = None  # "720", "1080", ...
    headers: dict[str, str] | None = None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "server": self.server,
            "link": self.link,
            "type": self.type,
        }
        if self.quality:
            data["quality"] = self.quality
        if self.headers:
            data["headers"] = dict(self.headers)
        return data


def guess_stream_type(url: str) -> StreamType:
    """Guess the container from a URL path."""
    path = url.split("?", 1)[0].lower()
    if path.endswith(".m3u8"):
        return "m3u8"
    if path.endswith(".mp4"):
        return "mp4"
    if path.endswith(".mkv"):
        return "mkv"
    return "unknown"
