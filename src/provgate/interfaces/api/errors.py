"""Maps engine outcomes onto HTTP responses."""

from __future__ import annotations

import structlog
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from provgate.domain.entities.execution import InvocationResult
from provgate.domain.providers import ProviderExecutionError

log = structlog.get_logger(__name__)

STATUS_BY_KIND: dict[str, int] = {
    "ProviderNotFound": 404,
    "ModuleNotFound": 404,
    "UnknownCapability": 400,
    "CapabilityNotSupported": 501,
    "ModuleLoadError": 503,
    "ProviderExecutionFailed": 500,
}


def result_response(result: InvocationResult) -> JSONResponse:
    """Provider payloads pass through unchanged; failures carry their kind."""
    if result.ok:
        try:
            return JSONResponse(content=jsonable_encoder(result.data))
        except (TypeError, ValueError) as e:
            # NaN/Infinity, lone surrogates or objects the encoder rejects.
            log.warning(
                "provider_result_not_serializable",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            result = InvocationResult.from_error(
                ProviderExecutionError(f"Provider returned a non-JSON result: {e}")
            )
    assert result.error is not None  # noqa: S101
    return JSONResponse(
        status_code=STATUS_BY_KIND.get(result.error.kind, 500),
        content=result.error.to_dict(),
    )


def bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": message, "kind": "BadRequest"})
