"""Capability model and normalized invocation outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from provgate.domain.providers.exceptions import ProviderError, UnknownCapabilityError


class ModuleGroup(str, Enum):
    """Compiled-artifact unit bundling one or more capabilities."""

    POSTS = "posts"
    META = "meta"
    STREAM = "stream"
    EPISODES = "episodes"

    @property
    def filename(self) -> str:
        return f"{self.value}.py"


class Capability(str, Enum):
    """Closed set of abstract provider operations."""

    LIST_POSTS = "list-posts"
    SEARCH_POSTS = "search-posts"
    FETCH_META = "fetch-meta"
    FETCH_STREAM = "fetch-stream"
    FETCH_EPISODES = "fetch-episodes"

    @property
    def group(self) -> ModuleGroup:
        return CAPABILITY_BINDINGS[self].group

    @property
    def export_name(self) -> str:
        return CAPABILITY_BINDINGS[self].export_name

    @classmethod
    def parse(cls, name: str | Capability) -> Capability:
        """Validate *name* against the capability set.

        Accepts the canonical names and the legacy dev-server function
        names (``getPosts``, ``getMeta``, ...).
        """
        if isinstance(name, Capability):
            return name
        try:
            return cls(name)
        except ValueError:
            pass
        alias = _LEGACY_ALIASES.get(name)
        if alias is None:
            raise UnknownCapabilityError(f"Unknown function: {name}")
        return alias


@dataclass(frozen=True)
class CapabilityBinding:
    """Where a capability lives inside a provider's compiled output."""

    group: ModuleGroup
    export_name: str


CAPABILITY_BINDINGS: dict[Capability, CapabilityBinding] = {
    Capability.LIST_POSTS: CapabilityBinding(ModuleGroup.POSTS, "list_posts"),
    Capability.SEARCH_POSTS: CapabilityBinding(ModuleGroup.POSTS, "search_posts"),
    Capability.FETCH_META: CapabilityBinding(ModuleGroup.META, "get_meta"),
    Capability.FETCH_STREAM: CapabilityBinding(ModuleGroup.STREAM, "get_stream"),
    Capability.FETCH_EPISODES: CapabilityBinding(
        ModuleGroup.EPISODES, "get_episodes"
    ),
}

_LEGACY_ALIASES: dict[str, Capability] = {
    "getPosts": Capability.LIST_POSTS,
    "getSearchPosts": Capability.SEARCH_POSTS,
    "getMeta": Capability.FETCH_META,
    "getStream": Capability.FETCH_STREAM,
    "getEpisodes": Capability.FETCH_EPISODES,
}


def capabilities_in(group: ModuleGroup) -> tuple[Capability, ...]:
    """Capabilities bound to *group*, in declaration order."""
    return tuple(
        cap for cap, binding in CAPABILITY_BINDINGS.items() if binding.group == group
    )


@dataclass(frozen=True)
class ErrorInfo:
    """Client-facing error: a kind from the error taxonomy plus a message."""

    kind: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message, "kind": self.kind}


@dataclass(frozen=True)
class InvocationResult:
    """Either a fully-formed payload or a fully-formed error, never both."""

    ok: bool
    data: Any = None
    error: ErrorInfo | None = None

    @classmethod
    def success(cls, data: Any) -> InvocationResult:
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, kind: str, message: str) -> InvocationResult:
        return cls(ok=False, error=ErrorInfo(kind=kind, message=message))

    @classmethod
    def from_error(cls, exc: ProviderError) -> InvocationResult:
        return cls.failure(exc.kind, str(exc) or type(exc).__name__)
