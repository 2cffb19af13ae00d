"""Filesystem-backed provider registry (no caching)."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path

import structlog

from provgate.domain.providers import ProviderInfo, ProviderNotFoundError

log = structlog.get_logger(__name__)

_PROVIDER_ID_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")
# Single path component limit on common filesystems.
_MAX_PROVIDER_ID_LENGTH = 255


def is_valid_provider_id(provider_id: str) -> bool:
    """Reject anything that could escape the artifact roots."""
    if len(provider_id) > _MAX_PROVIDER_ID_LENGTH:
        return False
    return bool(_PROVIDER_ID_RE.match(provider_id)) and ".." not in provider_id


class FilesystemProviderRegistry:
    """
    Provider registry backed by the compiled-artifact root.

    A provider exists iff ``<dist_dir>/<provider_id>/`` is a directory at
    query time. Every call rescans, so results always reflect the latest
    build.
    """

    def __init__(
        self,
        dist_dir: Path,
        source_dir: Path,
        manifest_path: Path,
    ) -> None:
        self._dist_dir = dist_dir
        self._source_dir = source_dir
        self._manifest_path = manifest_path

    @property
    def dist_dir(self) -> Path:
        return self._dist_dir

    @property
    def manifest_path(self) -> Path:
        return self._manifest_path

    def list_providers(self) -> list[str]:
        try:
            if not self._dist_dir.is_dir():
                log.debug("provider_dist_dir_not_found", directory=str(self._dist_dir))
                return []

            return sorted(
                path.name
                for path in self._dist_dir.iterdir()
                if is_valid_provider_id(path.name) and path.is_dir()
            )
        except OSError as e:
            log.warning(
                "provider_dist_dir_unreadable",
                directory=str(self._dist_dir),
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return []

    def exists(self, provider_id: str) -> bool:
        if not is_valid_provider_id(provider_id):
            return False
        try:
            return (self._dist_dir / provider_id).is_dir()
        except OSError as e:
            log.debug("provider_lookup_failed", provider=provider_id, error_message=str(e))
            return False

    def get(self, provider_id: str) -> ProviderInfo:
        if not self.exists(provider_id):
            raise ProviderNotFoundError(f"Provider '{provider_id}' not found")
        return ProviderInfo(
            provider_id=provider_id,
            dist_path=self._dist_dir / provider_id,
            source_path=self._source_dir / provider_id,
        )

    def build_timestamp(self) -> datetime | None:
        """UTC mtime of the manifest; ``None`` when no build exists."""
        try:
            mtime = self._manifest_path.stat().st_mtime
        except FileNotFoundError:
            return None
        return datetime.fromtimestamp(mtime, tz=timezone.utc)
