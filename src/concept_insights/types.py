"""Shared request and trace records."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

HTTP_METHODS = ("GET", "PUT", "POST", "DELETE")


class SegmentKind(str, Enum):
    ACCOUNT = "account"
    GRAPH = "graph"
    CORPUS = "corpus"
    CONCEPT = "concept"
    DOCUMENT = "document"
    SUB_RESOURCE = "sub-resource"


class CallState(str, Enum):
    """Lifecycle of a single request: built, sent, then one terminal state."""

    BUILT = "built"
    SENT = "sent"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class Segment:
    """One typed component of a resource path."""

    kind: SegmentKind
    value: str


@dataclass(frozen=True, slots=True)
class RequestSpec:
    """A fully assembled HTTP request. Never mutated after construction."""

    method: str
    path: str
    query: Mapping[str, Any] = field(default_factory=dict)
    content: str | None = None
    content_type: str | None = None

    def __post_init__(self) -> None:
        method = self.method.upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {self.method}")
        if self.content is not None and not self.content_type:
            raise ValueError("content_type is required when content is set")
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "query", MappingProxyType(dict(self.query)))


@dataclass(slots=True)
class RequestTrace:
    """Trace record for one executed request."""

    endpoint: str
    method: str
    path: str
    state: CallState
    latency_ms: float
    status_code: int | None = None
    error: str | None = None
