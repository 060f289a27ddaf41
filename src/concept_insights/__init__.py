"""Concept Insights client package."""

from .client import ConceptInsights
from .config import ClientConfig
from .errors import (
    ConceptInsightsError,
    DecodeError,
    InvalidPathSegmentError,
    MissingParameterError,
    RequestCancelledError,
    TransportError,
    UpstreamStatusError,
)

__all__ = [
    "ClientConfig",
    "ConceptInsights",
    "ConceptInsightsError",
    "DecodeError",
    "InvalidPathSegmentError",
    "MissingParameterError",
    "RequestCancelledError",
    "TransportError",
    "UpstreamStatusError",
]
