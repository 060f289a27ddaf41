"""Query parameter encoding.

Scalars are handed to httpx unchanged. Sequences are sent as compact JSON
arrays (``["a","b"]``), the convention the API uses for list-valued query
parameters. Element order is the caller's and is never re-sorted, since the
service ranks and filters by it.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

QueryValue = str | int | bool


def encode_list(values: Sequence[str]) -> str:
    return json.dumps([str(value) for value in values], ensure_ascii=False, separators=(",", ":"))


def decode_list(encoded: str) -> list[str]:
    payload = json.loads(encoded)
    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON array, got {type(payload).__name__}")
    return [str(item) for item in payload]


def encode_value(value: Any) -> QueryValue:
    if isinstance(value, (str, int, bool)):
        return value
    if isinstance(value, Sequence):
        return encode_list(value)
    raise TypeError(f"Unsupported query value type: {type(value).__name__}")


def encode_query(params: Mapping[str, Any]) -> dict[str, QueryValue]:
    """Encode a parameter mapping for the wire, dropping ``None`` values."""
    return {key: encode_value(value) for key, value in params.items() if value is not None}
