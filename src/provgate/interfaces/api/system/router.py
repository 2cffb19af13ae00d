"""Dev-server housekeeping routes: status, build trigger and static artifacts."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import cast

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, JSONResponse
from starlette.responses import Response

from provgate.infrastructure.providers import is_valid_provider_id
from provgate.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["system"])


def _state(request: Request) -> AppState:
    return cast(AppState, request.app.state)


def _iso(dt: datetime | None) -> str | None:
    if dt is None:
        return None
    return dt.isoformat().replace("+00:00", "Z")


@router.get("/status")
async def status(request: Request) -> JSONResponse:
    state = _state(request)
    providers = state.engine.list_available_providers()
    return JSONResponse(
        content={
            "status": "running",
            "port": state.port,
            "providers": len(providers),
            "providerList": providers,
            "buildTime": _iso(state.engine.build_timestamp()),
        }
    )


@router.get("/providers")
async def providers(request: Request) -> list[str]:
    return _state(request).engine.list_available_providers()


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy", "timestamp": _iso(datetime.now(timezone.utc)) or ""}


@router.get("/manifest.json")
async def manifest(request: Request) -> Response:
    path = _state(request).config.manifest_path
    if not path.is_file():
        return JSONResponse(
            status_code=404, content={"error": "Manifest not found. Run build first."}
        )
    return FileResponse(path, media_type="application/json")


@router.get("/dist/{provider}/{file}")
async def dist_file(request: Request, provider: str, file: str) -> Response:
    """Serve one compiled artifact, e.g. ``/dist/demo/posts.py``."""
    dist_dir = _state(request).config.dist_dir
    path = dist_dir / provider / file
    if is_valid_provider_id(provider) and is_valid_provider_id(file) and path.is_file():
        return FileResponse(path)
    return JSONResponse(
        status_code=404,
        content={
            "error": f"File not found: {provider}/{file}",
            "hint": "Make sure to run build first",
        },
    )


@router.post("/build")
async def build(request: Request) -> JSONResponse:
    """Run the provider build; the next invoke picks up the new artifacts."""
    outcome = await _state(request).build_runner.run()
    return JSONResponse(status_code=200 if outcome.success else 500, content=outcome.to_dict())
