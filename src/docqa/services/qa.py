"""Question answering over the currently loaded document."""
from __future__ import annotations

import inspect
import logging
import time
from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, Field

from docqa.errors import AnswerGenerationError, DocumentNotLoadedError
from docqa.models import DocumentInfo, ScoredPassage
from docqa.providers import LLMProvider, MockLLMProvider
from docqa.retrieval import DocumentRetriever

LOGGER = logging.getLogger(__name__)

NO_RELEVANT_INFORMATION_MESSAGE = (
    "I couldn't find relevant information in the document to answer your question. "
    "Please try rephrasing or ask a different question."
)
SYSTEM_PROMPT = (
    "You are a helpful AI assistant that answers questions based on documents. "
    "Always provide accurate, detailed answers based on the context provided. "
    "If the context doesn't contain enough information, say so clearly. "
    "Be concise but informative."
)
DEFAULT_MAX_TOKENS = 1024


async def _maybe_await(result: Any) -> Any:
    """Await result if it is awaitable."""

    if inspect.isawaitable(result):
        return await result
    return result


class CitationModel(BaseModel):
    page: int = Field(..., ge=1, description="Approximate page number of the cited passage.")


class SourcePassage(BaseModel):
    id: int
    text: str
    start: int
    end: int
    estimated_page: int
    score: float = Field(..., ge=0.0)


class AnswerResponse(BaseModel):
    """Payload returned to the caller of :meth:`DocumentQAService.answer`."""

    question: str
    response: str
    found: bool
    citations: List[CitationModel] = Field(default_factory=list)
    sources: List[SourcePassage] = Field(default_factory=list)
    model: Optional[str] = None
    duration_seconds: float = 0.0


def build_context(passages: Sequence[ScoredPassage]) -> str:
    """Join retrieved passages into numbered context sections."""

    return "\n\n".join(
        f"[Context {index}]:\n{passage.text}" for index, passage in enumerate(passages, start=1)
    )


def build_prompt(question: str, passages: Sequence[ScoredPassage]) -> str:
    context = build_context(passages)
    return (
        f"{SYSTEM_PROMPT}\n\n"
        "Based on the following context from the document, please answer the question.\n\n"
        f"Context:\n{context}\n\n"
        f"Question: {question.strip()}\n"
        "Please provide a clear and detailed answer based on the context above."
    )


def _serialise_sources(passages: Sequence[ScoredPassage]) -> List[SourcePassage]:
    return [
        SourcePassage(
            id=passage.passage_id,
            text=passage.text,
            start=passage.start_offset,
            end=passage.end_offset,
            estimated_page=passage.estimated_page,
            score=passage.score,
        )
        for passage in passages
    ]


class DocumentQAService:
    """Coordinate document ingestion and question answering."""

    def __init__(
        self,
        *,
        retriever: Optional[DocumentRetriever] = None,
        provider: Optional[LLMProvider] = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> None:
        self.retriever = retriever or DocumentRetriever()
        self.provider = provider or MockLLMProvider()
        self.max_tokens = max_tokens

    async def ingest_document(self, text: Optional[str], page_count: Optional[int] = None) -> DocumentInfo:
        started = time.perf_counter()
        info = self.retriever.ingest(text, page_count=page_count)
        LOGGER.info(
            "Document ready with %s passages in %.3fs", info.passage_count, time.perf_counter() - started
        )
        return info

    def clear(self) -> None:
        self.retriever.clear_document()

    async def answer(self, question: str, top_k: Optional[int] = None) -> AnswerResponse:
        if question is None or not question.strip():
            raise ValueError("question must not be empty")
        if not self.retriever.has_document:
            raise DocumentNotLoadedError("No document loaded. Please upload a document first.")

        started = time.perf_counter()
        result = self.retriever.retrieve(question, top_k)
        citations = [CitationModel(page=citation.page) for citation in result.citations]

        if result.is_empty:
            return AnswerResponse(
                question=question,
                response=NO_RELEVANT_INFORMATION_MESSAGE,
                found=False,
                duration_seconds=time.perf_counter() - started,
            )

        prompt = build_prompt(question, result.passages)
        try:
            answer_text = await _maybe_await(self.provider.generate(prompt, max_tokens=self.max_tokens))
        except Exception as error:
            LOGGER.exception("Answer generation failed with provider %s", self.provider.model_name)
            raise AnswerGenerationError("Failed to generate an answer", cause=error) from error

        return AnswerResponse(
            question=question,
            response=answer_text or "No response generated",
            found=True,
            citations=citations,
            sources=_serialise_sources(result.passages),
            model=self.provider.model_name,
            duration_seconds=time.perf_counter() - started,
        )


__all__ = [
    "AnswerResponse",
    "CitationModel",
    "DocumentQAService",
    "NO_RELEVANT_INFORMATION_MESSAGE",
    "SourcePassage",
    "build_context",
    "build_prompt",
]
