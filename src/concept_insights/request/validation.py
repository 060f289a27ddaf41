"""Required-parameter checks run before any path is built."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from concept_insights.errors import MissingParameterError


def require(params: Mapping[str, Any], keys: Iterable[str]) -> None:
    """Raise ``MissingParameterError`` for the first key that is absent or ``None``.

    Keys are checked in the order given, so the error always names the earliest
    missing key of the declaration.
    """
    for key in keys:
        if params.get(key) is None:
            raise MissingParameterError(key)


def require_any(params: Mapping[str, Any], keys: tuple[str, ...]) -> None:
    """Raise unless at least one of ``keys`` carries a value."""
    if all(params.get(key) is None for key in keys):
        raise MissingParameterError(
            keys[0], f"{' or '.join(keys)} should be identified"
        )
