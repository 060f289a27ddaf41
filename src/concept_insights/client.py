"""Concept Insights v2 client."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import httpx
from pydantic import BaseModel

from concept_insights import models as m
from concept_insights.config import ClientConfig
from concept_insights.endpoints.catalog import register_builtin_endpoints
from concept_insights.endpoints.params import EndpointParams
from concept_insights.endpoints.registry import EndpointRegistry
from concept_insights.obs.tracing import TraceStore
from concept_insights.request.executor import RequestExecutor

logger = logging.getLogger(__name__)


def _create_http_client(config: ClientConfig) -> httpx.Client:
    return httpx.Client(
        base_url=config.base_url,
        headers={"User-Agent": config.user_agent},
        timeout=httpx.Timeout(config.timeout_seconds),
    )


class ConceptInsights:
    """Work with concept graphs, corpora and documents of the Concept Insights service.

    Every operation validates its parameters, builds the resource path, sends a
    single request and returns the decoded result model (or ``None`` for
    create/update/delete). Validation failures are raised before any request
    is sent. An ``httpx.Client`` can be injected to control transport settings;
    otherwise one is created from ``config``. An injected client stays owned by
    the caller: ``close`` leaves it open, while ``cancel`` closes it to abort the
    in-flight call.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        http_client: httpx.Client | None = None,
        registry: EndpointRegistry | None = None,
        trace_store: TraceStore | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self._owns_http = http_client is None
        self._http = http_client or _create_http_client(self.config)
        if registry is None:
            registry = EndpointRegistry()
            register_builtin_endpoints(registry)
        self.registry = registry
        self.trace_store = trace_store or TraceStore()
        self._executor = RequestExecutor(self._http, auth=self.config.credentials)
        self._executor.set_observer(self.trace_store.add)

    def close(self) -> None:
        """Release the connection pool if this client created it."""
        if self._owns_http:
            self._http.close()

    def cancel(self) -> None:
        """Abort the in-flight call and close the client. Later calls fail fast."""
        logger.info("Cancelling Concept Insights client")
        self._executor.cancel()

    def __enter__(self) -> ConceptInsights:
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    def execute(
        self,
        name: str,
        payload: Mapping[str, Any] | EndpointParams | None = None,
        **kwargs: Any,
    ) -> BaseModel | None:
        """Run the registered endpoint ``name`` with ``payload`` merged with ``kwargs``."""
        if isinstance(payload, EndpointParams):
            if kwargs:
                raise TypeError("keyword arguments cannot be combined with a params struct")
            request_payload: Mapping[str, Any] | EndpointParams = payload
        else:
            request_payload = {**(payload or {}), **kwargs}
        spec, request = self.registry.build_request(name, request_payload)
        logger.debug("%s (%s): %s %s", spec.name, spec.description, request.method, request.path)
        return self._executor.execute(request, spec.result_type, endpoint=spec.name)

    # Accounts and graphs

    def get_accounts_info(self) -> m.Accounts:
        return self.execute("get_accounts_info")

    def get_graphs(self) -> m.Graphs:
        return self.execute("get_graphs")

    def search_graphs_concept_by_label(
        self,
        account_id: str,
        graph: str,
        query: str,
        *,
        prefix: bool | None = None,
        limit: int | None = None,
    ) -> m.Matches:
        return self.execute(
            "search_graphs_concept_by_label",
            account_id=account_id,
            graph=graph,
            query=query,
            prefix=prefix,
            limit=limit,
        )

    def get_graphs_related_concepts(
        self,
        account_id: str,
        graph: str,
        *,
        concept: str | None = None,
        concepts: Sequence[str] | None = None,
        level: int | None = None,
        limit: int | None = None,
    ) -> m.Concepts:
        """Concepts related to ``concepts`` (graph-wide) or to a single ``concept``."""
        return self.execute(
            "get_graphs_related_concepts",
            account_id=account_id,
            graph=graph,
            concept=concept,
            concepts=concepts,
            level=level,
            limit=limit,
        )

    def annotate_text(self, account_id: str, graph: str, body: str) -> m.Annotations:
        """Annotate the plain text ``body`` against the concepts of ``graph``."""
        return self.execute("annotate_text", account_id=account_id, graph=graph, body=body)

    def get_concept(self, account_id: str, graph: str, concept: str) -> m.ConceptMetadata:
        return self.execute("get_concept", account_id=account_id, graph=graph, concept=concept)

    def get_graphs_relation_scores(
        self, account_id: str, graph: str, concept: str, concepts: Sequence[str]
    ) -> m.Scores:
        return self.execute(
            "get_graphs_relation_scores",
            account_id=account_id,
            graph=graph,
            concept=concept,
            concepts=concepts,
        )

    # Corpora

    def list_corpora(self) -> m.Corpora:
        return self.execute("list_corpora")

    def get_corpora(self, account_id: str) -> m.Corpora:
        return self.execute("get_corpora", account_id=account_id)

    def get_corpus(self, account_id: str, corpus: str) -> m.Corpus:
        return self.execute("get_corpus", account_id=account_id, corpus=corpus)

    def create_corpus(
        self, account_id: str, corpus: str, body: m.Corpus | Mapping[str, Any]
    ) -> None:
        self.execute("create_corpus", account_id=account_id, corpus=corpus, body=body)

    def update_corpus(
        self, account_id: str, corpus: str, body: m.Corpus | Mapping[str, Any]
    ) -> None:
        self.execute("update_corpus", account_id=account_id, corpus=corpus, body=body)

    def delete_corpus(self, account_id: str, corpus: str) -> None:
        self.execute("delete_corpus", account_id=account_id, corpus=corpus)

    def get_corpus_processing_state(
        self, account_id: str, corpus: str
    ) -> m.CorpusProcessingState:
        return self.execute("get_corpus_processing_state", account_id=account_id, corpus=corpus)

    def get_corpus_stats(self, account_id: str, corpus: str) -> m.CorpusStats:
        return self.execute("get_corpus_stats", account_id=account_id, corpus=corpus)

    def search_corpus_by_label(
        self,
        account_id: str,
        corpus: str,
        query: str,
        *,
        prefix: bool | None = None,
        limit: int | None = None,
        concepts: bool | None = None,
        concept_fields: Sequence[str] | None = None,
        document_fields: Sequence[str] | None = None,
    ) -> m.Matches:
        return self.execute(
            "search_corpus_by_label",
            account_id=account_id,
            corpus=corpus,
            query=query,
            prefix=prefix,
            limit=limit,
            concepts=concepts,
            concept_fields=concept_fields,
            document_fields=document_fields,
        )

    def get_corpus_related_concepts(
        self,
        account_id: str,
        corpus: str,
        *,
        level: int | None = None,
        limit: int | None = None,
        concept_fields: Sequence[str] | None = None,
    ) -> m.Concepts:
        return self.execute(
            "get_corpus_related_concepts",
            account_id=account_id,
            corpus=corpus,
            level=level,
            limit=limit,
            concept_fields=concept_fields,
        )

    def get_corpus_relation_scores(
        self, account_id: str, corpus: str, concepts: Sequence[str]
    ) -> m.Scores:
        return self.execute(
            "get_corpus_relation_scores",
            account_id=account_id,
            corpus=corpus,
            concepts=concepts,
        )

    def conceptual_search(
        self,
        account_id: str,
        corpus: str,
        ids: Sequence[str],
        *,
        cursor: int | None = None,
        limit: int | None = None,
        concept_fields: Sequence[str] | None = None,
        document_fields: Sequence[str] | None = None,
    ) -> m.QueryConcepts:
        """Rank the corpus' documents against concept ``ids``, in the order given."""
        return self.execute(
            "conceptual_search",
            account_id=account_id,
            corpus=corpus,
            ids=ids,
            cursor=cursor,
            limit=limit,
            concept_fields=concept_fields,
            document_fields=document_fields,
        )

    # Documents

    def list_documents(
        self,
        account_id: str,
        corpus: str,
        *,
        cursor: int | None = None,
        limit: int | None = None,
        query: Sequence[str] | None = None,
    ) -> m.Documents:
        return self.execute(
            "list_documents",
            account_id=account_id,
            corpus=corpus,
            cursor=cursor,
            limit=limit,
            query=query,
        )

    def get_document(self, account_id: str, corpus: str, document: str) -> m.Document:
        return self.execute(
            "get_document", account_id=account_id, corpus=corpus, document=document
        )

    def create_document(
        self,
        account_id: str,
        corpus: str,
        document: str,
        body: m.Document | Mapping[str, Any],
    ) -> None:
        self.execute(
            "create_document",
            account_id=account_id,
            corpus=corpus,
            document=document,
            body=body,
        )

    def update_document(
        self,
        account_id: str,
        corpus: str,
        document: str,
        body: m.Document | Mapping[str, Any],
    ) -> None:
        self.execute(
            "update_document",
            account_id=account_id,
            corpus=corpus,
            document=document,
            body=body,
        )

    def delete_document(self, account_id: str, corpus: str, document: str) -> None:
        self.execute(
            "delete_document", account_id=account_id, corpus=corpus, document=document
        )

    def get_document_annotations(
        self, account_id: str, corpus: str, document: str
    ) -> m.DocumentAnnotations:
        return self.execute(
            "get_document_annotations", account_id=account_id, corpus=corpus, document=document
        )

    def get_document_processing_state(
        self, account_id: str, corpus: str, document: str
    ) -> m.DocumentProcessingState:
        return self.execute(
            "get_document_processing_state",
            account_id=account_id,
            corpus=corpus,
            document=document,
        )

    def get_document_related_concepts(
        self,
        account_id: str,
        corpus: str,
        document: str,
        *,
        level: int | None = None,
        limit: int | None = None,
        concept_fields: Sequence[str] | None = None,
    ) -> m.Concepts:
        return self.execute(
            "get_document_related_concepts",
            account_id=account_id,
            corpus=corpus,
            document=document,
            level=level,
            limit=limit,
            concept_fields=concept_fields,
        )

    def get_document_relation_scores(
        self, account_id: str, corpus: str, document: str, concepts: Sequence[str]
    ) -> m.Scores:
        return self.execute(
            "get_document_relation_scores",
            account_id=account_id,
            corpus=corpus,
            document=document,
            concepts=concepts,
        )
