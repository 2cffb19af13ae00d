"""Runs one provider function and normalizes its outcome."""

from __future__ import annotations

import asyncio
import inspect
from typing import Any

import structlog

from provgate.domain.entities.execution import InvocationResult
from provgate.domain.providers import ExecutionContext, ProviderExecutionError, ProviderFunction

log = structlog.get_logger(__name__)


class _ProviderRaised(Exception):
    """Carries an exception raised by provider code past ``wait_for``."""

    def __init__(self, error: Exception) -> None:
        super().__init__(error)
        self.error = error


async def _call(fn: ProviderFunction, context: ExecutionContext) -> Any:
    # A provider's own TimeoutError must not look like the deadline firing.
    try:
        result = fn(**context.as_kwargs())
        if inspect.isawaitable(result):
            result = await result
    except Exception as e:
        raise _ProviderRaised(e) from e
    return result


class Executor:
    """
    Invokes a provider function exactly once.

    Provider exceptions become a ``ProviderExecutionFailed`` result. With
    ``timeout_seconds`` set, an overrunning call is cancelled, its signal is
    tripped with reason ``"timeout"`` and the result is a failure as well.
    Task cancellation (``asyncio.CancelledError``) is never swallowed.
    """

    def __init__(self, timeout_seconds: float | None = None) -> None:
        self._timeout = timeout_seconds

    @property
    def timeout_seconds(self) -> float | None:
        return self._timeout

    async def execute(self, fn: ProviderFunction, context: ExecutionContext) -> InvocationResult:
        try:
            if self._timeout is None:
                data = await _call(fn, context)
            else:
                data = await asyncio.wait_for(_call(fn, context), timeout=self._timeout)
        except _ProviderRaised as e:
            return self._failed(context, e.error)
        except asyncio.TimeoutError:
            # Only the deadline reaches here; provider errors are wrapped.
            context.signal.cancel("timeout")
            log.warning(
                "provider_execution_timed_out",
                provider=context.provider_id,
                capability=context.capability.value,
                timeout_seconds=self._timeout,
            )
            return InvocationResult.from_error(
                ProviderExecutionError(f"timed out after {self._timeout:g}s")
            )

        return InvocationResult.success(data)

    @staticmethod
    def _failed(context: ExecutionContext, exc: Exception) -> InvocationResult:
        log.warning(
            "provider_execution_failed",
            provider=context.provider_id,
            capability=context.capability.value,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return InvocationResult.from_error(
            ProviderExecutionError(str(exc) or type(exc).__name__)
        )
