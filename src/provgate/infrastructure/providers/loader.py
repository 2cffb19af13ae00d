"""Loads provider module groups from the compiled-artifact root.

Every ``load()`` reads the artifact from disk again and swaps the handle
registry entry, so a rebuild is observed on the very next request without
restarting the process.
"""

from __future__ import annotations

import importlib.util
import itertools
import sys
import traceback
from datetime import datetime, timezone
from pathlib import Path
from types import ModuleType

import structlog

from provgate.domain.entities.execution import Capability, ModuleGroup, capabilities_in
from provgate.domain.providers import (
    ModuleHandle,
    ProviderModuleLoadError,
    ProviderModuleNotFoundError,
)

from .registry import is_valid_provider_id

log = structlog.get_logger(__name__)

HandleKey = tuple[str, ModuleGroup]


def _module_name(provider_id: str, group: ModuleGroup) -> str:
    safe = "".join(c if c.isalnum() else "_" for c in provider_id)
    return f"provgate_provider_{safe}_{group.value}"


def _declared_capabilities(module: ModuleType, group: ModuleGroup) -> frozenset[Capability]:
    return frozenset(
        cap
        for cap in capabilities_in(group)
        if callable(getattr(module, cap.export_name, None))
    )


def _import_module_from_path(name: str, path: Path) -> ModuleType:
    spec = importlib.util.spec_from_file_location(name, str(path))
    if spec is None or spec.loader is None:
        raise ProviderModuleLoadError(f"Could not create import spec for {path}")

    module = importlib.util.module_from_spec(spec)
    # Registered during execution so dataclasses/pickle can resolve the module.
    sys.modules[name] = module
    try:
        # Compile from source: cached bytecode is keyed on mtime and size and
        # can mask a rebuild that lands within the same second.
        source = path.read_bytes()
        code = compile(source, str(path), "exec", dont_inherit=True)
        exec(code, module.__dict__)  # noqa: S102
    except SyntaxError as e:
        sys.modules.pop(name, None)
        tb = traceback.format_exc()
        raise ProviderModuleLoadError(f"SyntaxError while importing {path}:\n{tb}") from e
    except Exception as e:
        sys.modules.pop(name, None)
        tb = traceback.format_exc()
        raise ProviderModuleLoadError(f"Error while importing {path}:\n{tb}") from e

    return module


class ProviderModuleLoader:
    """
    Explicit handle registry keyed by ``(provider_id, module_group)``.

    load():
      - evicts the previous module from ``sys.modules``
      - executes the artifact fresh from disk
      - replaces the registry entry with a single assignment

    A failed load leaves the previous handle in place; callers never see a
    half-replaced handle.
    """

    def __init__(self, dist_dir: Path) -> None:
        self._dist_dir = dist_dir
        self._handles: dict[HandleKey, ModuleHandle] = {}
        self._versions: dict[HandleKey, itertools.count[int]] = {}

    @property
    def dist_dir(self) -> Path:
        return self._dist_dir

    def artifact_path(self, provider_id: str, group: ModuleGroup) -> Path:
        return self._dist_dir / provider_id / group.filename

    def current(self, provider_id: str, group: ModuleGroup) -> ModuleHandle | None:
        return self._handles.get((provider_id, group))

    def load(self, provider_id: str, group: ModuleGroup) -> ModuleHandle:
        path = self.artifact_path(provider_id, group)
        if not is_valid_provider_id(provider_id) or not path.is_file():
            raise ProviderModuleNotFoundError(
                f"Provider function not found: {provider_id}/{group.value} "
                f"(no compiled artifact at {path})"
            )

        key = (provider_id, group)
        name = _module_name(provider_id, group)
        sys.modules.pop(name, None)

        try:
            module = _import_module_from_path(name, path)
        except ProviderModuleLoadError as e:
            log.error(
                "provider_module_load_failed",
                provider=provider_id,
                group=group.value,
                module_file=str(path),
                error_type=type(e.__cause__ or e).__name__,
                error_message=str(e.__cause__ or e),
            )
            raise

        version = next(self._versions.setdefault(key, itertools.count(1)))
        handle = ModuleHandle(
            provider_id=provider_id,
            group=group,
            version=version,
            path=path,
            module=module,
            loaded_at=datetime.now(timezone.utc),
            provides=_declared_capabilities(module, group),
        )
        self._handles[key] = handle

        log.debug(
            "provider_module_loaded",
            provider=provider_id,
            group=group.value,
            version=version,
            provides=sorted(cap.value for cap in handle.provides),
        )
        return handle

    def evict(self, provider_id: str, group: ModuleGroup | None = None) -> None:
        """Forget loaded handles for *provider_id* (all groups by default)."""
        groups = [group] if group is not None else list(ModuleGroup)
        for g in groups:
            if self._handles.pop((provider_id, g), None) is not None:
                sys.modules.pop(_module_name(provider_id, g), None)
