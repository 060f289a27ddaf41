"""Typed response and request-body models for the v2 API.

Fields the service adds later are kept (``extra="allow"``) rather than
rejected; a field whose type does not match still fails decoding.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ApiModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class AccountPermission(ApiModel):
    account_id: str | None = None
    permission: str | None = None


class Account(ApiModel):
    account_id: str | None = None
    account_permissions: list[AccountPermission] = Field(default_factory=list)


class Accounts(ApiModel):
    accounts: list[Account] = Field(default_factory=list)


class Graphs(ApiModel):
    graphs: list[str] = Field(default_factory=list)


class ConceptRef(ApiModel):
    id: str | None = None
    label: str | None = None


class Match(ApiModel):
    id: str | None = None
    label: str | None = None
    type: str | None = None
    score: float | None = None
    matched_fields: list[str] = Field(default_factory=list)


class Matches(ApiModel):
    matches: list[Match] = Field(default_factory=list)


class ScoredConcept(ApiModel):
    concept: ConceptRef
    score: float | None = None


class Concepts(ApiModel):
    concepts: list[ScoredConcept] = Field(default_factory=list)


class Annotation(ApiModel):
    concept: ConceptRef
    score: float | None = None
    text_index: list[int] = Field(default_factory=list)


class Annotations(ApiModel):
    annotations: list[Annotation] = Field(default_factory=list)


class ConceptMetadata(ApiModel):
    id: str | None = None
    label: str | None = None
    abstract: str | None = None
    link: str | None = None
    thumbnail: str | None = None
    ontology: list[str] = Field(default_factory=list)


class Score(ApiModel):
    concept: str | None = None
    score: float | None = None


class Scores(ApiModel):
    scores: list[Score] = Field(default_factory=list)


class CorpusUser(ApiModel):
    uid: str | None = None
    permission: str | None = None


class Corpus(ApiModel):
    """A corpus description, also used as the body of create/update calls."""

    id: str | None = None
    name: str | None = None
    access: str | None = None
    ttl_hours: int | None = None
    users: list[CorpusUser] = Field(default_factory=list)


class Corpora(ApiModel):
    corpora: list[Corpus] = Field(default_factory=list)


class Part(ApiModel):
    name: str | None = None
    data: str | None = None
    content_type: str | None = Field(default=None, alias="content-type")


class Document(ApiModel):
    """A corpus document, also used as the body of create/update calls."""

    id: str | None = None
    label: str | None = None
    parts: list[Part] = Field(default_factory=list)
    user_fields: dict[str, str] = Field(default_factory=dict)
    last_modified: str | None = None


class Documents(ApiModel):
    documents: list[str] = Field(default_factory=list)


class CorpusProcessingState(ApiModel):
    id: str | None = None
    documents: int | None = None
    last_updated: str | None = None
    build_status: dict[str, Any] = Field(default_factory=dict)


class CorpusStats(ApiModel):
    id: str | None = None
    top_tags: dict[str, Any] = Field(default_factory=dict)
    field_stats: dict[str, Any] = Field(default_factory=dict, alias="fields")


class DocumentProcessingState(ApiModel):
    id: str | None = None
    status: str | None = None
    last_modified: str | None = None


class DocumentAnnotations(ApiModel):
    annotations: list[Any] = Field(default_factory=list)


class SearchResult(ApiModel):
    id: str | None = None
    label: str | None = None
    score: float | None = None
    explanation_tags: list[dict[str, Any]] = Field(default_factory=list)


class QueryConcepts(ApiModel):
    query_concepts: list[ConceptRef] = Field(default_factory=list)
    results: list[SearchResult] = Field(default_factory=list)
