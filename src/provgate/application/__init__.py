"""Application layer: capability dispatch, execution and the engine facade."""

from __future__ import annotations

from .context_builder import ExecutionContextBuilder
from .dispatcher import CapabilityDispatcher
from .engine import ProviderEngine
from .executor import Executor

__all__ = [
    "CapabilityDispatcher",
    "ExecutionContextBuilder",
    "Executor",
    "ProviderEngine",
]
