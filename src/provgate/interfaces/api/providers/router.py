"""Provider routes: catalog plus one route per capability.

Each capability route assembles the parameter mapping the provider
expects and hands it to ``ProviderEngine.invoke``.
"""

from __future__ import annotations

from typing import Any, Optional, cast

import structlog
from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from provgate.application import ProviderEngine
from provgate.domain.entities.execution import Capability
from provgate.interfaces.api.errors import bad_request, result_response
from provgate.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["providers"])


class ExecuteProviderRequest(BaseModel):
    """Body of ``POST /execute-provider``; fields are checked in the route."""

    provider: Optional[str] = None
    function: Optional[str] = None
    params: Optional[dict[str, Any]] = None


def _engine(request: Request) -> ProviderEngine:
    return cast(AppState, request.app.state).engine


@router.get("/catalog/{provider}")
async def catalog(request: Request, provider: str) -> JSONResponse:
    """Catalog and genres declared in the provider's source artifact."""
    return JSONResponse(content=_engine(request).resolve_catalog(provider).to_dict())


@router.get("/posts/{provider}")
async def posts(
    request: Request,
    provider: str,
    filter: str = Query(default="", description="Catalog filter value."),
    page: int = Query(default=1, description="1-based page number."),
) -> JSONResponse:
    result = await _engine(request).invoke(
        provider, Capability.LIST_POSTS, {"filter": filter, "page": page}
    )
    return result_response(result)


@router.get("/search/{provider}")
async def search(
    request: Request,
    provider: str,
    query: str = Query(default="", description="Search query."),
    page: int = Query(default=1, description="1-based page number."),
) -> JSONResponse:
    result = await _engine(request).invoke(
        provider, Capability.SEARCH_POSTS, {"search_query": query, "page": page}
    )
    return result_response(result)


@router.get("/meta/{provider}")
async def meta(
    request: Request,
    provider: str,
    link: Optional[str] = Query(default=None),
) -> JSONResponse:
    if not link:
        return bad_request("Link parameter is required")
    result = await _engine(request).invoke(provider, Capability.FETCH_META, {"link": link})
    return result_response(result)


@router.get("/stream/{provider}")
async def stream(
    request: Request,
    provider: str,
    link: Optional[str] = Query(default=None),
    type: Optional[str] = Query(default=None, description="Content type, e.g. movie/series."),
) -> JSONResponse:
    if not link:
        return bad_request("Link parameter is required")
    result = await _engine(request).invoke(
        provider, Capability.FETCH_STREAM, {"link": link, "type": type}
    )
    return result_response(result)


@router.get("/episodes/{provider}")
async def episodes(
    request: Request,
    provider: str,
    url: Optional[str] = Query(default=None),
) -> JSONResponse:
    if not url:
        return bad_request("URL parameter is required")
    result = await _engine(request).invoke(provider, Capability.FETCH_EPISODES, {"url": url})
    return result_response(result)


@router.post("/execute-provider")
async def execute_provider(request: Request, body: ExecuteProviderRequest) -> JSONResponse:
    """Invoke any capability by name (canonical or legacy function name)."""
    if not body.provider or not body.function or body.params is None:
        return bad_request("Missing required fields: provider, function, params")
    result = await _engine(request).invoke(body.provider, body.function, body.params)
    return result_response(result)
