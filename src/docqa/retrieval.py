"""Retrieval façade tying the chunker, the index and citation derivation."""
from __future__ import annotations

import logging
import threading
from typing import Iterable, List, Optional, Tuple

from docqa.chunker import ChunkingConfig, TextChunker
from docqa.config import RetrievalSettings, get_settings
from docqa.index import PassageIndex
from docqa.models import Citation, DocumentInfo, Passage, RetrievalResult, ScoredPassage
from docqa.normalization import normalize_text
from docqa.scoring import get_scorer

LOGGER = logging.getLogger(__name__)
AUDIT_LOGGER = logging.getLogger("docqa.audit")

DEFAULT_MAX_CITATIONS = 3


def derive_citations(passages: Iterable[ScoredPassage], limit: int = DEFAULT_MAX_CITATIONS) -> List[Citation]:
    """Map ranked passages to unique page citations in first-seen order."""

    citations: List[Citation] = []
    seen: set[int] = set()
    for passage in passages:
        if len(citations) >= limit:
            break
        page = passage.estimated_page
        if page in seen:
            continue
        seen.add(page)
        citations.append(Citation(page=page))
    return citations


class DocumentRetriever:
    """Owns the passage index of the currently loaded document."""

    def __init__(
        self,
        index: Optional[PassageIndex] = None,
        settings: Optional[RetrievalSettings] = None,
    ) -> None:
        self.settings = settings if settings is not None else get_settings()
        if index is None:
            index = PassageIndex(
                scorer=get_scorer(self.settings.scorer, min_term_length=self.settings.min_term_length)
            )
        self.index = index
        self.chunker = TextChunker(
            ChunkingConfig(chunk_size=self.settings.chunk_size, overlap=self.settings.chunk_overlap)
        )
        self._document: Optional[DocumentInfo] = None
        # Guards the index contents and _document so both always describe one ingest.
        self._ingest_lock = threading.Lock()

    @property
    def document(self) -> Optional[DocumentInfo]:
        return self._document

    @property
    def has_document(self) -> bool:
        return not self.index.is_empty

    def snapshot(self) -> Tuple[Optional[DocumentInfo], Tuple[Passage, ...]]:
        """Return the document description and the passages it was built from."""

        with self._ingest_lock:
            return self._document, self.index.snapshot()

    def ingest(self, raw_text: Optional[str], page_count: Optional[int] = None) -> DocumentInfo:
        """Chunk *raw_text* and replace the index contents with the result."""

        text = normalize_text(raw_text) if self.settings.normalize_whitespace else (raw_text or "")
        passages = self.chunker.chunk(text)
        info = DocumentInfo(char_count=len(text), passage_count=len(passages), page_count=page_count)
        with self._ingest_lock:
            self.index.replace(passages)
            self._document = info if passages else None

        LOGGER.info(
            "Ingested document with %s characters into %s passages", info.char_count, info.passage_count
        )
        AUDIT_LOGGER.info(
            {
                "event": "ingest",
                "char_count": info.char_count,
                "passage_count": info.passage_count,
                "page_count": page_count,
            }
        )
        return info

    def clear_document(self) -> None:
        with self._ingest_lock:
            self.index.clear()
            self._document = None
        AUDIT_LOGGER.info({"event": "clear"})

    def retrieve(self, query: str, k: Optional[int] = None) -> RetrievalResult:
        """Return the top passages for *query* together with their citations."""

        top_k = self.settings.top_k if k is None else k
        passages = self.index.search(query, top_k)
        if not passages:
            LOGGER.info("No passages retrieved (index empty=%s)", self.index.is_empty)
            return RetrievalResult()

        citations = derive_citations(passages, limit=self.settings.max_citations)
        AUDIT_LOGGER.info(
            {
                "event": "query",
                "query": query,
                "top_k": top_k,
                "passage_ids": [passage.passage_id for passage in passages],
                "pages": [citation.page for citation in citations],
            }
        )
        return RetrievalResult(passages=passages, citations=citations)


__all__ = ["DEFAULT_MAX_CITATIONS", "DocumentRetriever", "derive_citations"]
