import json
from collections.abc import Iterator
from typing import Any

import pytest
from fastapi import FastAPI, HTTPException, Request
from fastapi.testclient import TestClient

from concept_insights import (
    ClientConfig,
    ConceptInsights,
    MissingParameterError,
    UpstreamStatusError,
)
from concept_insights.models import Corpus, Document, Part


def _build_fake_service() -> tuple[FastAPI, list[str], dict[str, Any]]:
    """A minimal in-memory stand-in for the Concept Insights v2 API."""
    app = FastAPI()
    hits: list[str] = []
    corpora: dict[str, dict[str, Any]] = {}
    documents: dict[str, dict[str, Any]] = {}

    @app.middleware("http")
    async def record_hits(request: Request, call_next):
        hits.append(f"{request.method} {request.url.path}")
        return await call_next(request)

    @app.get("/v2/accounts")
    def accounts() -> dict[str, Any]:
        return {"accounts": [{"account_id": "acct1", "account_permissions": []}]}

    @app.get("/v2/graphs")
    def graphs() -> dict[str, Any]:
        return {"graphs": ["/graphs/wikipedia/en-20120601"]}

    @app.get("/v2/graphs/{account}/{graph}/label_search")
    def graph_label_search(account: str, graph: str, query: str, limit: int = 10) -> dict[str, Any]:
        matches = [
            {"id": f"/graphs/{account}/{graph}/concepts/{label}", "label": label}
            for label in ("IBM", "IBM_Watson", "IBM_Research")
            if label.lower().startswith(query.lower())
        ]
        return {"matches": matches[:limit]}

    @app.get("/v2/graphs/{account}/{graph}/related_concepts")
    def graph_related(account: str, graph: str, concepts: str) -> dict[str, Any]:
        ids = json.loads(concepts)
        return {
            "concepts": [
                {"concept": {"id": concept_id, "label": concept_id.rsplit("/", 1)[-1]}, "score": 1.0 / (rank + 1)}
                for rank, concept_id in enumerate(ids)
            ]
        }

    @app.get("/v2/graphs/{account}/{graph}/concepts/{concept}/related_concepts")
    def concept_related(account: str, graph: str, concept: str, level: int = 0) -> dict[str, Any]:
        return {"concepts": [{"concept": {"id": f"{concept}-neighbour", "label": f"level {level}"}, "score": 0.5}]}

    @app.post("/v2/graphs/{account}/{graph}/annotate_text")
    async def annotate(account: str, graph: str, request: Request) -> dict[str, Any]:
        assert request.headers["content-type"].startswith("text/plain")
        text = (await request.body()).decode("utf-8")
        start = text.find("Watson")
        if start < 0:
            return {"annotations": []}
        return {
            "annotations": [
                {
                    "concept": {"id": "/graphs/wikipedia/en-20120601/concepts/Watson_(computer)", "label": "Watson (computer)"},
                    "score": 0.99,
                    "text_index": [start, start + len("Watson")],
                }
            ]
        }

    @app.get("/v2/corpora/{account}/{corpus}/")
    def get_corpus(account: str, corpus: str) -> dict[str, Any]:
        key = f"{account}/{corpus}"
        if key not in corpora:
            raise HTTPException(status_code=404, detail=f"corpus {key} not found")
        return corpora[key]

    @app.put("/v2/corpora/{account}/{corpus}/")
    def create_corpus(account: str, corpus: str, body: dict[str, Any]) -> dict[str, Any]:
        corpora[f"{account}/{corpus}"] = {"id": f"/corpora/{account}/{corpus}", "name": corpus, **body}
        return {}

    @app.delete("/v2/corpora/{account}/{corpus}/")
    def delete_corpus(account: str, corpus: str) -> dict[str, Any]:
        if corpora.pop(f"{account}/{corpus}", None) is None:
            raise HTTPException(status_code=404, detail="missing")
        return {}

    @app.get("/v2/corpora/{account}/{corpus}/stats")
    def corpus_stats(account: str, corpus: str) -> dict[str, Any]:
        raise HTTPException(status_code=500, detail="stats backend unavailable")

    @app.get("/v2/corpora/{account}/{corpus}/conceptual_search")
    def conceptual_search(account: str, corpus: str, ids: str, limit: int = 10) -> dict[str, Any]:
        query_ids = json.loads(ids)
        return {
            "query_concepts": [{"id": concept_id} for concept_id in query_ids],
            "results": [
                {"id": doc["id"], "label": doc.get("label"), "score": 0.8}
                for doc in documents.values()
            ][:limit],
        }

    @app.put("/v2/corpora/{account}/{corpus}/documents/{document}/")
    def create_document(account: str, corpus: str, document: str, body: dict[str, Any]) -> dict[str, Any]:
        documents[f"{account}/{corpus}/{document}"] = {
            "id": f"/corpora/{account}/{corpus}/documents/{document}",
            **body,
        }
        return {}

    @app.get("/v2/corpora/{account}/{corpus}/documents/{document}/")
    def get_document(account: str, corpus: str, document: str) -> dict[str, Any]:
        key = f"{account}/{corpus}/{document}"
        if key not in documents:
            raise HTTPException(status_code=404, detail="missing")
        return documents[key]

    @app.get("/v2/corpora/{account}/{corpus}/documents")
    def list_documents(account: str, corpus: str, limit: int = 100) -> dict[str, Any]:
        return {"documents": [doc["id"] for doc in documents.values()][:limit]}

    return app, hits, corpora


@pytest.fixture()
def service() -> Iterator[tuple[ConceptInsights, list[str], dict[str, Any]]]:
    app, hits, corpora = _build_fake_service()
    with TestClient(app) as http:
        with ConceptInsights(
            ClientConfig(username="user", password="secret"), http_client=http
        ) as client:
            yield client, hits, corpora


def test_graph_operations(service) -> None:
    client, _, _ = service

    assert client.get_accounts_info().accounts[0].account_id == "acct1"
    assert client.get_graphs().graphs == ["/graphs/wikipedia/en-20120601"]

    matches = client.search_graphs_concept_by_label("wikipedia", "en-20120601", "ibm_", limit=1)
    assert [match.label for match in matches.matches] == ["IBM_Watson"]

    related = client.get_graphs_related_concepts(
        "wikipedia", "en-20120601", concepts=["/c/Watson", "/c/IBM"]
    )
    assert [item.concept.label for item in related.concepts] == ["Watson", "IBM"]

    single = client.get_graphs_related_concepts("wikipedia", "en-20120601", concept="IBM", level=2)
    assert single.concepts[0].concept.label == "level 2"

    annotations = client.annotate_text("wikipedia", "en-20120601", "IBM Watson won Jeopardy")
    assert annotations.annotations[0].text_index == [4, 10]


def test_corpus_and_document_lifecycle(service) -> None:
    client, hits, corpora = service

    client.create_corpus("acct1", "news", Corpus(access="private"))
    assert corpora["acct1/news"]["access"] == "private"

    corpus = client.get_corpus("acct1", "news")
    assert isinstance(corpus, Corpus)
    assert corpus.name == "news"

    client.create_document(
        "acct1",
        "news",
        "doc-1",
        Document(label="Watson", parts=[Part(name="body", data="IBM Watson", content_type="text/plain")]),
    )
    document = client.get_document("acct1", "news", "doc-1")
    assert document.label == "Watson"
    assert document.parts[0].content_type == "text/plain"

    assert client.list_documents("acct1", "news").documents == ["/corpora/acct1/news/documents/doc-1"]

    search = client.conceptual_search("acct1", "news", ids=["/c/b", "/c/a"], limit=5)
    assert [concept.id for concept in search.query_concepts] == ["/c/b", "/c/a"]
    assert search.results[0].label == "Watson"

    client.delete_corpus("acct1", "news")
    with pytest.raises(UpstreamStatusError) as exc_info:
        client.get_corpus("acct1", "news")
    assert exc_info.value.status_code == 404
    assert "PUT /v2/corpora/acct1/news/" in hits


def test_server_error_on_read_surfaces_status_error(service) -> None:
    client, _, _ = service

    with pytest.raises(UpstreamStatusError) as exc_info:
        client.get_corpus_stats("acct1", "news")

    assert exc_info.value.status_code == 500
    summary = client.trace_store.summary()
    assert summary["failed_requests"] == 1
    assert summary["status_codes"] == {"500": 1}


def test_missing_account_id_sends_nothing(service) -> None:
    client, hits, _ = service

    with pytest.raises(MissingParameterError) as exc_info:
        client.get_graphs_related_concepts(None, "en-20120601", concept="IBM")  # type: ignore[arg-type]

    assert exc_info.value.key == "account_id"
    assert hits == []
    assert client.trace_store.summary()["total_requests"] == 0


def test_generic_execute_matches_named_method(service) -> None:
    client, _, _ = service

    result = client.execute("get_graphs")
    assert result == client.get_graphs()
