"""Document chunking and lexical retrieval for single-document question answering."""

from docqa.chunker import ChunkingConfig, TextChunker, chunk_text, estimate_page
from docqa.config import RetrievalSettings, get_settings
from docqa.errors import (
    AnswerGenerationError,
    DocQAError,
    DocumentNotLoadedError,
    InvalidConfigurationError,
)
from docqa.index import IndexState, PassageIndex
from docqa.models import Citation, DocumentInfo, Passage, RetrievalResult, ScoredPassage
from docqa.retrieval import DocumentRetriever, derive_citations
from docqa.scoring import CosineSimilarityScorer, KeywordMatchScorer, cosine_similarity, get_scorer, keyword_match_score

__all__ = [
    "AnswerGenerationError",
    "ChunkingConfig",
    "Citation",
    "CosineSimilarityScorer",
    "DocQAError",
    "DocumentInfo",
    "DocumentNotLoadedError",
    "DocumentRetriever",
    "IndexState",
    "InvalidConfigurationError",
    "KeywordMatchScorer",
    "Passage",
    "PassageIndex",
    "RetrievalResult",
    "RetrievalSettings",
    "ScoredPassage",
    "TextChunker",
    "chunk_text",
    "cosine_similarity",
    "derive_citations",
    "estimate_page",
    "get_scorer",
    "get_settings",
    "keyword_match_score",
]
