"""Port for hosting-backend content extractors."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from provgate.domain.entities.stream import StreamLink


@runtime_checkable
class ContentExtractorPort(Protocol):
    """Turns a hoster page/share URL into playable stream links.

    Implementations handle site-specific extraction logic (packed JS,
    token handshakes, API calls, etc.).
    """

    @property
    def name(self) -> str:
        """Extractor name providers look it up by (e.g. 'gofile')."""
        ...

    async def extract(self, url: str) -> list[StreamLink]:
        """Return playable links, or an empty list when extraction fails."""
        ...
