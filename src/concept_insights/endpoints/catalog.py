"""The v2 endpoint catalog."""

from __future__ import annotations

from concept_insights import models as m
from concept_insights.endpoints import params as p
from concept_insights.endpoints.registry import EndpointRegistry, EndpointSpec

LABEL_SEARCH = "label_search"
RELATED_CONCEPTS = "related_concepts"
RELATION_SCORES = "relation_scores"
ANNOTATE_TEXT = "annotate_text"
ANNOTATIONS = "annotations"
CONCEPTUAL_SEARCH = "conceptual_search"
DOCUMENTS = "documents"
PROCESSING_STATE = "processing_state"
STATS = "stats"

BUILTIN_ENDPOINTS: tuple[EndpointSpec, ...] = (
    # Accounts and graphs
    EndpointSpec(
        name="get_accounts_info",
        method="GET",
        description="Accounts the credentials have access to.",
        params_schema=p.AccountsParams,
        result_type=m.Accounts,
        tags=["accounts"],
    ),
    EndpointSpec(
        name="get_graphs",
        method="GET",
        description="Graphs available to the caller.",
        params_schema=p.GraphsParams,
        result_type=m.Graphs,
        tags=["graphs"],
    ),
    EndpointSpec(
        name="search_graphs_concept_by_label",
        method="GET",
        description="Search a graph's concepts by label.",
        params_schema=p.GraphLabelSearchParams,
        sub_resource=LABEL_SEARCH,
        result_type=m.Matches,
        tags=["graphs", "search"],
    ),
    EndpointSpec(
        name="get_graphs_related_concepts",
        method="GET",
        description="Concepts related to a concept or a list of concepts.",
        params_schema=p.GraphRelatedConceptsParams,
        sub_resource=RELATED_CONCEPTS,
        result_type=m.Concepts,
        tags=["graphs", "concepts"],
    ),
    EndpointSpec(
        name="annotate_text",
        method="POST",
        description="Annotate plain text against a graph.",
        params_schema=p.AnnotateTextParams,
        sub_resource=ANNOTATE_TEXT,
        result_type=m.Annotations,
        tags=["graphs", "annotations"],
    ),
    EndpointSpec(
        name="get_concept",
        method="GET",
        description="Metadata of a single graph concept.",
        params_schema=p.ConceptParams,
        result_type=m.ConceptMetadata,
        tags=["graphs", "concepts"],
    ),
    EndpointSpec(
        name="get_graphs_relation_scores",
        method="GET",
        description="Relation scores between a concept and a list of concepts.",
        params_schema=p.GraphRelationScoresParams,
        sub_resource=RELATION_SCORES,
        result_type=m.Scores,
        tags=["graphs", "concepts"],
    ),
    # Corpora
    EndpointSpec(
        name="list_corpora",
        method="GET",
        description="All corpora visible to the caller.",
        params_schema=p.CorporaParams,
        result_type=m.Corpora,
        tags=["corpora"],
    ),
    EndpointSpec(
        name="get_corpora",
        method="GET",
        description="Corpora owned by an account.",
        params_schema=p.AccountParams,
        result_type=m.Corpora,
        tags=["corpora"],
    ),
    EndpointSpec(
        name="get_corpus",
        method="GET",
        description="Corpus description.",
        params_schema=p.CorpusParams,
        result_type=m.Corpus,
        tags=["corpora"],
    ),
    EndpointSpec(
        name="create_corpus",
        method="PUT",
        description="Create a corpus.",
        params_schema=p.CorpusBodyParams,
        tags=["corpora", "write"],
    ),
    EndpointSpec(
        name="update_corpus",
        method="POST",
        description="Update a corpus.",
        params_schema=p.CorpusBodyParams,
        tags=["corpora", "write"],
    ),
    EndpointSpec(
        name="delete_corpus",
        method="DELETE",
        description="Delete a corpus.",
        params_schema=p.CorpusParams,
        tags=["corpora", "write"],
    ),
    EndpointSpec(
        name="get_corpus_processing_state",
        method="GET",
        description="Ingestion progress of a corpus.",
        params_schema=p.CorpusParams,
        sub_resource=PROCESSING_STATE,
        result_type=m.CorpusProcessingState,
        tags=["corpora"],
    ),
    EndpointSpec(
        name="get_corpus_stats",
        method="GET",
        description="Statistics of a corpus.",
        params_schema=p.CorpusParams,
        sub_resource=STATS,
        result_type=m.CorpusStats,
        tags=["corpora"],
    ),
    EndpointSpec(
        name="search_corpus_by_label",
        method="GET",
        description="Search a corpus' concepts and documents by label.",
        params_schema=p.CorpusLabelSearchParams,
        sub_resource=LABEL_SEARCH,
        result_type=m.Matches,
        tags=["corpora", "search"],
    ),
    EndpointSpec(
        name="get_corpus_related_concepts",
        method="GET",
        description="Concepts related to a corpus.",
        params_schema=p.CorpusRelatedConceptsParams,
        sub_resource=RELATED_CONCEPTS,
        result_type=m.Concepts,
        tags=["corpora", "concepts"],
    ),
    EndpointSpec(
        name="get_corpus_relation_scores",
        method="GET",
        description="Relation scores between a corpus and a list of concepts.",
        params_schema=p.CorpusRelationScoresParams,
        sub_resource=RELATION_SCORES,
        result_type=m.Scores,
        tags=["corpora", "concepts"],
    ),
    EndpointSpec(
        name="conceptual_search",
        method="GET",
        description="Documents of a corpus ranked against a list of concept ids.",
        params_schema=p.ConceptualSearchParams,
        sub_resource=CONCEPTUAL_SEARCH,
        result_type=m.QueryConcepts,
        tags=["corpora", "search"],
    ),
    # Documents
    EndpointSpec(
        name="list_documents",
        method="GET",
        description="Document ids in a corpus.",
        params_schema=p.ListDocumentsParams,
        sub_resource=DOCUMENTS,
        result_type=m.Documents,
        tags=["documents"],
    ),
    EndpointSpec(
        name="get_document",
        method="GET",
        description="A corpus document.",
        params_schema=p.DocumentParams,
        result_type=m.Document,
        tags=["documents"],
    ),
    EndpointSpec(
        name="create_document",
        method="PUT",
        description="Create a document in a corpus.",
        params_schema=p.DocumentBodyParams,
        tags=["documents", "write"],
    ),
    EndpointSpec(
        name="update_document",
        method="POST",
        description="Update a document in a corpus.",
        params_schema=p.DocumentBodyParams,
        tags=["documents", "write"],
    ),
    EndpointSpec(
        name="delete_document",
        method="DELETE",
        description="Delete a document from a corpus.",
        params_schema=p.DocumentParams,
        tags=["documents", "write"],
    ),
    EndpointSpec(
        name="get_document_annotations",
        method="GET",
        description="Annotations computed for a document.",
        params_schema=p.DocumentParams,
        sub_resource=ANNOTATIONS,
        result_type=m.DocumentAnnotations,
        tags=["documents", "annotations"],
    ),
    EndpointSpec(
        name="get_document_processing_state",
        method="GET",
        description="Ingestion progress of a document.",
        params_schema=p.DocumentParams,
        sub_resource=PROCESSING_STATE,
        result_type=m.DocumentProcessingState,
        tags=["documents"],
    ),
    EndpointSpec(
        name="get_document_related_concepts",
        method="GET",
        description="Concepts related to a document.",
        params_schema=p.DocumentRelatedConceptsParams,
        sub_resource=RELATED_CONCEPTS,
        result_type=m.Concepts,
        tags=["documents", "concepts"],
    ),
    EndpointSpec(
        name="get_document_relation_scores",
        method="GET",
        description="Relation scores between a document and a list of concepts.",
        params_schema=p.DocumentRelationScoresParams,
        sub_resource=RELATION_SCORES,
        result_type=m.Scores,
        tags=["documents", "concepts"],
    ),
)


def register_builtin_endpoints(registry: EndpointRegistry) -> None:
    """Register every v2 operation on ``registry``."""
    for spec in BUILTIN_ENDPOINTS:
        registry.register(spec)
