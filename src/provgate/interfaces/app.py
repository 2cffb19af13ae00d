"""FastAPI application factory (create_app)."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from provgate import __version__
from provgate.infrastructure.config import AppConfig
from provgate.interfaces.app_state import AppState
from provgate.interfaces.composition import lifespan

log = structlog.get_logger(__name__)

DEFAULT_PORT = 3002

AVAILABLE_ENDPOINTS: list[str] = [
    "GET /catalog/{provider}",
    "GET /posts/{provider}",
    "GET /search/{provider}",
    "GET /meta/{provider}",
    "GET /stream/{provider}",
    "GET /episodes/{provider}",
    "POST /execute-provider",
    "GET /manifest.json",
    "GET /dist/{provider}/{file}",
    "POST /build",
    "GET /status",
    "GET /providers",
    "GET /health",
]


def create_app(config: AppConfig, *, port: int = DEFAULT_PORT) -> FastAPI:
    """Create FastAPI app: configuration ONLY, NO resource initialization.

    Resources (HTTP client, provider context, engine) are created in lifespan().
    """
    app = FastAPI(
        title="provgate",
        description="Local development gateway for content-provider modules",
        version=__version__,
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config
    app.state.port = port

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    from provgate.interfaces.api.providers import router as providers_router
    from provgate.interfaces.api.system import router as system_router

    app.include_router(providers_router)
    app.include_router(system_router)

    @app.exception_handler(StarletteHTTPException)
    async def not_found(request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code != 404:
            return await http_exception_handler(request, exc)
        return JSONResponse(
            status_code=404,
            content={"error": "Not found", "availableEndpoints": AVAILABLE_ENDPOINTS},
        )

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None
        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                query=str(request.url.query),
                status_code=response.status_code if response is not None else 500,
                duration_ms=round(duration_ms, 2),
                client_host=(request.client.host if request.client else None),
            )

    return app
