"""Data models shared by the chunker, the index and the retrieval façade."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


@dataclass(frozen=True, slots=True)
class Passage:
    """A contiguous span of the normalised document text.

    ``estimated_page`` is a coarse approximation derived from the start offset,
    not the document's real pagination.
    """

    text: str
    start_offset: int
    end_offset: int
    estimated_page: int

    def __len__(self) -> int:
        return self.end_offset - self.start_offset


@dataclass(frozen=True, slots=True)
class ScoredPassage:
    """A passage annotated with its relevance score for a specific query."""

    passage_id: int
    passage: Passage
    score: float

    @property
    def text(self) -> str:
        return self.passage.text

    @property
    def start_offset(self) -> int:
        return self.passage.start_offset

    @property
    def end_offset(self) -> int:
        return self.passage.end_offset

    @property
    def estimated_page(self) -> int:
        return self.passage.estimated_page

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.passage_id,
            "text": self.text,
            "start": self.start_offset,
            "end": self.end_offset,
            "estimated_page": self.estimated_page,
            "score": self.score,
        }


@dataclass(frozen=True, slots=True)
class Citation:
    """User-facing page reference."""

    page: int

    def to_dict(self) -> Dict[str, int]:
        return {"page": self.page}


@dataclass(frozen=True, slots=True)
class DocumentInfo:
    """Describes the document currently held by a retriever."""

    char_count: int
    passage_count: int
    page_count: Optional[int] = None
    ingested_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(slots=True)
class RetrievalResult:
    """Ranked passages plus the citations derived from them."""

    passages: List[ScoredPassage] = field(default_factory=list)
    citations: List[Citation] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.passages

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passages": [passage.to_dict() for passage in self.passages],
            "citations": [citation.to_dict() for citation in self.citations],
        }


__all__ = ["Citation", "DocumentInfo", "Passage", "RetrievalResult", "ScoredPassage"]
