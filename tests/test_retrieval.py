"""Tests for the retrieval façade and citation derivation."""
import threading

import pytest

from docqa.config import RetrievalSettings
from docqa.errors import InvalidConfigurationError
from docqa.index import PassageIndex
from docqa.models import Citation, Passage, ScoredPassage
from docqa.retrieval import DocumentRetriever, derive_citations
from docqa.scoring import CosineSimilarityScorer, KeywordMatchScorer


def _scored(pages):
    return [
        ScoredPassage(
            passage_id=index,
            passage=Passage(text=f"p{index}", start_offset=index, end_offset=index + 1, estimated_page=page),
            score=float(len(pages) - index),
        )
        for index, page in enumerate(pages)
    ]


def test_derive_citations_deduplicates_and_caps() -> None:
    citations = derive_citations(_scored([2, 2, 5, 5, 5, 9, 9]))

    assert citations == [Citation(page=2), Citation(page=5), Citation(page=9)]
    assert [citation.to_dict() for citation in citations] == [{"page": 2}, {"page": 5}, {"page": 9}]


def test_derive_citations_respects_limit_and_order() -> None:
    assert derive_citations(_scored([7, 3, 7, 1, 4]), limit=2) == [Citation(page=7), Citation(page=3)]
    assert derive_citations(_scored([7, 3]), limit=0) == []
    assert derive_citations([]) == []


def test_retrieve_on_empty_index_returns_empty_result(retriever) -> None:
    result = retriever.retrieve("anything", 3)

    assert result.is_empty
    assert result.to_dict() == {"passages": [], "citations": []}
    assert not retriever.has_document
    assert retriever.document is None


def test_ingest_chunks_and_indexes_text(retriever) -> None:
    info = retriever.ingest("A" * 3200, page_count=2)

    assert info.char_count == 3200
    assert info.passage_count == 3
    assert info.page_count == 2
    assert retriever.has_document
    assert retriever.document == info
    assert [(p.start_offset, p.end_offset) for p in retriever.index.snapshot()] == [
        (0, 1500),
        (1300, 2800),
        (2600, 3200),
    ]


def test_retrieve_returns_passages_with_citations() -> None:
    settings = RetrievalSettings(chunk_size=4000, chunk_overlap=0, top_k=3)
    retriever = DocumentRetriever(settings=settings)
    text = ("filler " * 1000) + "the warranty period is two years " + ("padding " * 1000)
    retriever.ingest(text)

    result = retriever.retrieve("warranty period", 2)

    assert len(result.passages) == 2
    assert "warranty" in result.passages[0].text
    assert result.passages[0].score == 2.0
    assert result.passages[0].estimated_page == 2
    assert result.citations == [Citation(page=2), Citation(page=1)]


def test_retrieve_uses_default_top_k(retriever) -> None:
    retriever.ingest("word " * 2000)

    assert len(retriever.retrieve("word").passages) == retriever.settings.top_k


def test_retrieve_is_deterministic(retriever) -> None:
    retriever.ingest(" ".join(f"token{i % 17}" for i in range(3000)))

    first = retriever.retrieve("token3 token5", 5)
    second = retriever.retrieve("token3 token5", 5)

    assert first == second


def test_new_ingest_replaces_previous_document(retriever) -> None:
    retriever.ingest("first document about lighthouses")
    retriever.ingest("second document about volcanoes")

    result = retriever.retrieve("lighthouses volcanoes", 5)

    assert [passage.text for passage in result.passages] == ["second document about volcanoes"]


def test_clear_document_empties_index(retriever) -> None:
    retriever.ingest("some document text")

    retriever.clear_document()

    assert not retriever.has_document
    assert retriever.document is None
    assert retriever.retrieve("document", 3).is_empty


def test_ingest_of_empty_text_leaves_no_document(retriever) -> None:
    info = retriever.ingest(None)

    assert info.passage_count == 0
    assert not retriever.has_document
    assert retriever.document is None


def test_ingest_normalises_whitespace_by_default(retriever) -> None:
    retriever.ingest("  line one\r\n\r\n\r\n\r\nline   two  ")

    assert retriever.index.snapshot()[0].text == "line one\n\nline two"


def test_ingest_keeps_raw_text_when_normalisation_disabled() -> None:
    retriever = DocumentRetriever(settings=RetrievalSettings(normalize_whitespace=False))

    retriever.ingest("  raw  ")

    assert retriever.index.snapshot()[0].text == "  raw  "


def test_retriever_builds_index_with_configured_scorer() -> None:
    cosine = DocumentRetriever(settings=RetrievalSettings(scorer="cosine"))
    keyword = DocumentRetriever(settings=RetrievalSettings(min_term_length=5))

    assert isinstance(cosine.index.scorer, CosineSimilarityScorer)
    assert isinstance(keyword.index.scorer, KeywordMatchScorer)
    assert keyword.index.scorer.min_term_length == 5


def test_retriever_rejects_invalid_chunking() -> None:
    with pytest.raises(InvalidConfigurationError):
        DocumentRetriever(settings=RetrievalSettings(chunk_size=100, chunk_overlap=100))


def test_retriever_fills_the_index_it_was_given() -> None:
    owned = PassageIndex(scorer=CosineSimilarityScorer())
    retriever = DocumentRetriever(index=owned, settings=RetrievalSettings())

    retriever.ingest("the cat sat on the mat")

    assert retriever.index is owned
    assert len(owned) > 0
    assert isinstance(owned.scorer, CosineSimilarityScorer)
    assert retriever.retrieve("the cat sat on the mat", 1).passages[0].score == 1.0


def test_document_info_matches_index_after_concurrent_ingests() -> None:
    retriever = DocumentRetriever(settings=RetrievalSettings(chunk_size=50, chunk_overlap=10))
    documents = [("word " * (40 * size), size) for size in range(1, 9)]
    mismatches: list[tuple[int, int]] = []

    def ingest(text: str, pages: int) -> None:
        for _ in range(25):
            retriever.ingest(text, page_count=pages)

    def observe() -> None:
        for _ in range(500):
            info, passages = retriever.snapshot()
            if info is not None and info.passage_count != len(passages):
                mismatches.append((info.passage_count, len(passages)))

    threads = [threading.Thread(target=ingest, args=document) for document in documents]
    threads.append(threading.Thread(target=observe))
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    info, passages = retriever.snapshot()
    assert mismatches == []
    assert info is not None
    assert info.passage_count == len(passages)
