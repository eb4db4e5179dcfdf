"""Split normalised document text into overlapping, offset-tagged passages."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from docqa.errors import InvalidConfigurationError
from docqa.models import Passage

LOGGER = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1500
DEFAULT_OVERLAP = 200
# Rough characters-per-page ratio used for page estimation.
CHARS_PER_PAGE = 3000


def validate_chunking(chunk_size: int, overlap: int) -> None:
    """Raise :class:`InvalidConfigurationError` for unusable chunk parameters."""

    if chunk_size <= 0:
        raise InvalidConfigurationError(f"chunk_size must be a positive integer, got {chunk_size}")
    if overlap < 0:
        raise InvalidConfigurationError(f"overlap must be a non-negative integer, got {overlap}")
    if chunk_size <= overlap:
        raise InvalidConfigurationError(
            f"chunk_size ({chunk_size}) must be greater than overlap ({overlap})"
        )


def estimate_page(offset: int) -> int:
    """Return the approximate 1-based page number for a character offset."""

    return max(1, offset // CHARS_PER_PAGE + 1)


def chunk_text(
    text: Optional[str],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_OVERLAP,
) -> List[Passage]:
    """Split *text* into fixed-size passages overlapping by *overlap* characters.

    Consecutive passages start ``chunk_size - overlap`` characters apart and the
    last one may be shorter than ``chunk_size``. ``None`` and empty strings
    yield an empty list.
    """

    validate_chunking(chunk_size, overlap)
    if not text:
        return []

    text_length = len(text)
    stride = chunk_size - overlap
    passages: List[Passage] = []
    start = 0

    while start < text_length:
        end = min(start + chunk_size, text_length)
        passages.append(
            Passage(
                text=text[start:end],
                start_offset=start,
                end_offset=end,
                estimated_page=estimate_page(start),
            )
        )
        start += stride

    return passages


@dataclass(frozen=True, slots=True)
class ChunkingConfig:
    chunk_size: int = DEFAULT_CHUNK_SIZE
    overlap: int = DEFAULT_OVERLAP

    def __post_init__(self) -> None:
        validate_chunking(self.chunk_size, self.overlap)

    @property
    def stride(self) -> int:
        return self.chunk_size - self.overlap


class TextChunker:
    """Chunker bound to a validated :class:`ChunkingConfig`."""

    def __init__(self, config: Optional[ChunkingConfig] = None) -> None:
        self.config = config or ChunkingConfig()

    def chunk(self, text: Optional[str]) -> List[Passage]:
        passages = chunk_text(text, self.config.chunk_size, self.config.overlap)
        LOGGER.debug(
            "Chunked %s characters into %s passages (size=%s, overlap=%s)",
            len(text or ""),
            len(passages),
            self.config.chunk_size,
            self.config.overlap,
        )
        return passages


__all__ = [
    "CHARS_PER_PAGE",
    "ChunkingConfig",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_OVERLAP",
    "TextChunker",
    "chunk_text",
    "estimate_page",
    "validate_chunking",
]
