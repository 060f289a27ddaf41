"""Per-operation parameter structs.

Each struct names its required keys in check order and the optional fields it
sends as query parameters. Required keys are enforced when the struct is built,
before any path exists, so a rejected call never reaches the network.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from concept_insights.models import Corpus, Document
from concept_insights.request.paths import ResourceRef
from concept_insights.request.query import QueryValue, encode_query
from concept_insights.request.validation import require, require_any

JSON_CONTENT = "application/json"
TEXT_CONTENT = "text/plain"


def _json_body(body: BaseModel) -> tuple[str, str]:
    # Fields the caller never set are left out, defaults included.
    return body.model_dump_json(by_alias=True, exclude_unset=True, exclude_none=True), JSON_CONTENT


class EndpointParams(BaseModel):
    """Base class: validated inputs of one API operation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    required: ClassVar[tuple[str, ...]] = ()
    query_fields: ClassVar[tuple[str, ...]] = ()
    # At least one of these must be present, checked after `required`.
    required_any: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def check_required_keys(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            require(data, cls.required)
            if cls.required_any:
                require_any(data, cls.required_any)
        return data

    @abstractmethod
    def resource(self) -> ResourceRef:
        """The resource this operation targets, before any sub-resource."""

    def query_params(self) -> dict[str, QueryValue]:
        return encode_query({name: getattr(self, name) for name in self.query_fields})

    def content(self) -> tuple[str, str] | None:
        """Request body and its content type, if the operation sends one."""
        return None


class AccountsParams(EndpointParams):
    def resource(self) -> ResourceRef:
        return ResourceRef.accounts()


class GraphsParams(EndpointParams):
    def resource(self) -> ResourceRef:
        return ResourceRef.graphs()


class CorporaParams(EndpointParams):
    def resource(self) -> ResourceRef:
        return ResourceRef.corpora()


# Graph operations


class GraphParams(EndpointParams):
    required = ("account_id", "graph")

    account_id: str
    graph: str

    def resource(self) -> ResourceRef:
        return ResourceRef.graphs(self.account_id, self.graph)


class GraphLabelSearchParams(GraphParams):
    required = ("account_id", "graph", "query")
    query_fields = ("query", "prefix", "limit")

    query: str
    prefix: bool | None = None
    limit: int | None = Field(default=None, ge=0)


class GraphRelatedConceptsParams(GraphParams):
    """Related concepts for a list of concepts, or for a single concept.

    When ``concepts`` is given the graph-level resource is queried with the
    list; otherwise the concept's own ``related_concepts`` resource is used.
    """

    query_fields = ("concepts", "level", "limit")
    required_any = ("concept", "concepts")

    concept: str | None = None
    concepts: list[str] | None = None
    level: int | None = Field(default=None, ge=0, le=3)
    limit: int | None = Field(default=None, ge=0)

    def resource(self) -> ResourceRef:
        if self.concepts is not None:
            return ResourceRef.graphs(self.account_id, self.graph)
        return ResourceRef.graphs(self.account_id, self.graph, self.concept)


class AnnotateTextParams(GraphParams):
    required = ("account_id", "graph", "body")

    body: str

    def content(self) -> tuple[str, str] | None:
        return self.body, TEXT_CONTENT


class ConceptParams(GraphParams):
    required = ("account_id", "graph", "concept")

    concept: str

    def resource(self) -> ResourceRef:
        return ResourceRef.graphs(self.account_id, self.graph, self.concept)


class GraphRelationScoresParams(ConceptParams):
    required = ("account_id", "graph", "concept", "concepts")
    query_fields = ("concepts",)

    concepts: list[str]


# Corpus operations


class AccountParams(EndpointParams):
    required = ("account_id",)

    account_id: str

    def resource(self) -> ResourceRef:
        return ResourceRef.corpora(self.account_id)


class CorpusParams(EndpointParams):
    required = ("account_id", "corpus")

    account_id: str
    corpus: str

    def resource(self) -> ResourceRef:
        return ResourceRef.corpora(self.account_id, self.corpus)


class CorpusBodyParams(CorpusParams):
    required = ("account_id", "corpus", "body")

    body: Corpus

    def content(self) -> tuple[str, str] | None:
        return _json_body(self.body)


class ListDocumentsParams(CorpusParams):
    query_fields = ("cursor", "limit", "query")

    cursor: int | None = Field(default=None, ge=0)
    limit: int | None = Field(default=None, ge=0)
    query: list[str] | None = None


class CorpusLabelSearchParams(CorpusParams):
    required = ("account_id", "corpus", "query")
    query_fields = ("query", "prefix", "limit", "concepts", "concept_fields", "document_fields")

    query: str
    prefix: bool | None = None
    limit: int | None = Field(default=None, ge=0)
    concepts: bool | None = None
    concept_fields: list[str] | None = None
    document_fields: list[str] | None = None


class CorpusRelatedConceptsParams(CorpusParams):
    query_fields = ("level", "limit", "concept_fields")

    level: int | None = Field(default=None, ge=0, le=3)
    limit: int | None = Field(default=None, ge=0)
    concept_fields: list[str] | None = None


class CorpusRelationScoresParams(CorpusParams):
    required = ("account_id", "corpus", "concepts")
    query_fields = ("concepts",)

    concepts: list[str]


class ConceptualSearchParams(CorpusParams):
    required = ("account_id", "corpus", "ids")
    query_fields = ("ids", "cursor", "limit", "concept_fields", "document_fields")

    ids: list[str]
    cursor: int | None = Field(default=None, ge=0)
    limit: int | None = Field(default=None, ge=0)
    concept_fields: list[str] | None = None
    document_fields: list[str] | None = None


# Document operations


class DocumentParams(CorpusParams):
    required = ("account_id", "corpus", "document")

    document: str

    def resource(self) -> ResourceRef:
        return ResourceRef.corpora(self.account_id, self.corpus, self.document)


class DocumentBodyParams(DocumentParams):
    required = ("account_id", "corpus", "document", "body")

    body: Document

    def content(self) -> tuple[str, str] | None:
        return _json_body(self.body)


class DocumentRelatedConceptsParams(DocumentParams):
    query_fields = ("level", "limit", "concept_fields")

    level: int | None = Field(default=None, ge=0, le=3)
    limit: int | None = Field(default=None, ge=0)
    concept_fields: list[str] | None = None


class DocumentRelationScoresParams(DocumentParams):
    required = ("account_id", "corpus", "document", "concepts")
    query_fields = ("concepts",)

    concepts: list[str]
