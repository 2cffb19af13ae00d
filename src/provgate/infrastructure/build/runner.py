"""Runs the provider build command on request."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import structlog

log = structlog.get_logger(__name__)

# Keep the tail of the build output; the beginning is usually npm noise.
_MAX_OUTPUT_CHARS = 4000


@dataclass(frozen=True)
class BuildOutcome:
    success: bool
    message: str

    def to_dict(self) -> dict[str, object]:
        return {"success": self.success, "message": self.message}


def _tail(output: bytes) -> str:
    text = output.decode("utf-8", errors="replace").strip()
    return text[-_MAX_OUTPUT_CHARS:]


class BuildRunner:
    """
    Executes the configured build command as a subprocess.

    Runs are serialized: a second trigger waits for the running build
    instead of writing into the same dist directory concurrently.
    """

    def __init__(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        timeout_seconds: float = 300.0,
    ) -> None:
        if not command:
            raise ValueError("build command must not be empty")
        self._command = list(command)
        self._cwd = cwd
        self._timeout = timeout_seconds
        self._lock = asyncio.Lock()

    @property
    def command(self) -> list[str]:
        return list(self._command)

    async def run(self) -> BuildOutcome:
        async with self._lock:
            return await self._run()

    async def _run(self) -> BuildOutcome:
        log.info("build_started", command=self._command, cwd=str(self._cwd or "."))
        try:
            proc = await asyncio.create_subprocess_exec(
                *self._command,
                cwd=str(self._cwd) if self._cwd is not None else None,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except (FileNotFoundError, PermissionError) as e:
            log.error("build_spawn_failed", command=self._command, error=str(e))
            return BuildOutcome(success=False, message=f"Build failed: {e}")

        try:
            stdout, _ = await asyncio.wait_for(proc.communicate(), timeout=self._timeout)
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            log.error("build_timed_out", timeout_seconds=self._timeout)
            return BuildOutcome(
                success=False,
                message=f"Build failed: timed out after {self._timeout:g}s",
            )

        output = _tail(stdout or b"")
        if proc.returncode != 0:
            log.error("build_failed", returncode=proc.returncode, output=output)
            detail = output or f"exit code {proc.returncode}"
            return BuildOutcome(success=False, message=f"Build failed: {detail}")

        log.info("build_completed", returncode=proc.returncode)
        return BuildOutcome(success=True, message="Build completed successfully")
