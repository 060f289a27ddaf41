"""Typed resource path builder for the v2 API.

Paths are assembled from `Segment`s whose kinds must follow the ordering of
their resource family:

- accounts: no segments (``/v2/accounts``)
- graphs:   account -> graph -> concept
- corpora:  account -> corpus -> document

Any ref may end with one sub-resource (``label_search``, ``stats`` ...).
Named resources render with a trailing slash; account-only refs and
sub-resources do not. Identifiers are not URL-escaped, so segments containing
``/``, ``?`` or ``#``, and the dot segments ``.`` and ``..``, are rejected to
keep distinct refs from rendering to the same path on the wire.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from concept_insights.errors import InvalidPathSegmentError
from concept_insights.types import Segment, SegmentKind

API_VERSION = "/v2"


class ResourceFamily(str, Enum):
    ACCOUNTS = "accounts"
    GRAPHS = "graphs"
    CORPORA = "corpora"

    @property
    def root(self) -> str:
        return f"{API_VERSION}/{self.value}"


_FAMILY_ORDER: dict[ResourceFamily, tuple[SegmentKind, ...]] = {
    ResourceFamily.ACCOUNTS: (),
    ResourceFamily.GRAPHS: (SegmentKind.ACCOUNT, SegmentKind.GRAPH, SegmentKind.CONCEPT),
    ResourceFamily.CORPORA: (SegmentKind.ACCOUNT, SegmentKind.CORPUS, SegmentKind.DOCUMENT),
}

# Collection keyword rendered in front of a nested named resource.
_COLLECTIONS = {
    SegmentKind.CONCEPT: "concepts",
    SegmentKind.DOCUMENT: "documents",
}

_NAMED = {SegmentKind.GRAPH, SegmentKind.CORPUS, SegmentKind.CONCEPT, SegmentKind.DOCUMENT}

# Dot segments are collapsed by URL normalization; "?" and "#" end the path.
_DOT_SEGMENTS = {".", ".."}
_DELIMITERS = ("/", "?", "#")


def _check_segment(kind: SegmentKind, value: Any) -> str:
    if (
        not isinstance(value, str)
        or not value
        or value in _DOT_SEGMENTS
        or any(delimiter in value for delimiter in _DELIMITERS)
    ):
        raise InvalidPathSegmentError(kind.value, value)
    return value


@dataclass(frozen=True, slots=True)
class ResourceRef:
    """Immutable hierarchical identifier of an API resource."""

    family: ResourceFamily
    segments: tuple[Segment, ...] = ()

    def __post_init__(self) -> None:
        order = _FAMILY_ORDER[self.family]
        kinds = [segment.kind for segment in self.segments]
        if kinds and kinds[-1] is SegmentKind.SUB_RESOURCE:
            kinds = kinds[:-1]
        if tuple(kinds) != order[: len(kinds)]:
            raise ValueError(
                f"Segment order {[k.value for k in kinds]} is invalid for {self.family.value}"
            )
        for segment in self.segments:
            _check_segment(segment.kind, segment.value)

    @classmethod
    def accounts(cls) -> ResourceRef:
        return cls(ResourceFamily.ACCOUNTS)

    @classmethod
    def graphs(cls, *values: str) -> ResourceRef:
        return cls._from_values(ResourceFamily.GRAPHS, values)

    @classmethod
    def corpora(cls, *values: str) -> ResourceRef:
        return cls._from_values(ResourceFamily.CORPORA, values)

    @classmethod
    def _from_values(cls, family: ResourceFamily, values: tuple[str, ...]) -> ResourceRef:
        order = _FAMILY_ORDER[family]
        if len(values) > len(order):
            raise ValueError(f"Too many segments for {family.value}: {values!r}")
        segments = tuple(
            Segment(kind, _check_segment(kind, value)) for kind, value in zip(order, values)
        )
        return cls(family, segments)

    def child(self, name: str) -> ResourceRef:
        """Return a new ref addressing ``name`` below this resource."""
        return ResourceRef(
            self.family,
            self.segments + (Segment(SegmentKind.SUB_RESOURCE, name),),
        )

    @property
    def path(self) -> str:
        parts = [self.family.root]
        for segment in self.segments:
            collection = _COLLECTIONS.get(segment.kind)
            if collection:
                parts.append(collection)
            parts.append(segment.value)
        path = "/".join(parts)
        if self.segments and self.segments[-1].kind in _NAMED:
            path += "/"
        return path

    def __str__(self) -> str:
        return self.path


def build_graph_path(account_id: str, graph: str) -> str:
    return ResourceRef.graphs(account_id, graph).path


def build_concept_path(account_id: str, graph: str, concept: str) -> str:
    return ResourceRef.graphs(account_id, graph, concept).path


def build_corpus_path(account_id: str, corpus: str) -> str:
    return ResourceRef.corpora(account_id, corpus).path


def build_document_path(account_id: str, corpus: str, document: str) -> str:
    return ResourceRef.corpora(account_id, corpus, document).path


def build_account_corpora_path(account_id: str) -> str:
    return ResourceRef.corpora(account_id).path
