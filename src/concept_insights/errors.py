"""Error taxonomy raised by the Concept Insights client."""

from __future__ import annotations

from typing import Any


class ConceptInsightsError(RuntimeError):
    """Base exception for every failure surfaced by this package."""


class MissingParameterError(ConceptInsightsError):
    """A required parameter was omitted or passed as ``None``."""

    def __init__(self, key: str, message: str | None = None) -> None:
        self.key = key
        super().__init__(message or f"{key} can't be null")


class InvalidPathSegmentError(ConceptInsightsError):
    """A resource identifier cannot be used as a path segment."""

    def __init__(self, kind: str, value: Any) -> None:
        self.kind = kind
        self.value = value
        super().__init__(f"Invalid {kind} path segment: {value!r}")


class TransportError(ConceptInsightsError):
    """The HTTP exchange failed before a response was received."""


class RequestCancelledError(TransportError):
    """The call was aborted through ``cancel()``."""


class DecodeError(ConceptInsightsError):
    """The response body is not valid JSON or does not match the result shape."""


class UpstreamStatusError(ConceptInsightsError):
    """The service answered with a non-2xx status code."""

    def __init__(self, status_code: int, detail: Any = None) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"Upstream returned HTTP {status_code}: {detail}")


__all__ = [
    "ConceptInsightsError",
    "DecodeError",
    "InvalidPathSegmentError",
    "MissingParameterError",
    "RequestCancelledError",
    "TransportError",
    "UpstreamStatusError",
]
