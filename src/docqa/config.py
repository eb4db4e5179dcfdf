"""Environment-driven settings for the retrieval engine."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from docqa.chunker import DEFAULT_CHUNK_SIZE, DEFAULT_OVERLAP, validate_chunking
from docqa.errors import InvalidConfigurationError
from docqa.scoring import DEFAULT_MIN_TERM_LENGTH, get_scorer

LOGGER = logging.getLogger(__name__)

_FALSE_VALUES = {"0", "false", "no", "off"}


def _int_from_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        LOGGER.warning("Invalid integer for %s: %s; using default %s", name, value, default)
        return default


def _bool_from_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() not in _FALSE_VALUES


@dataclass(frozen=True, slots=True)
class RetrievalSettings:
    """Tunables for chunking, ranking and citation derivation."""

    chunk_size: int = DEFAULT_CHUNK_SIZE
    chunk_overlap: int = DEFAULT_OVERLAP
    top_k: int = 3
    max_citations: int = 3
    scorer: str = "keyword"
    min_term_length: int = DEFAULT_MIN_TERM_LENGTH
    normalize_whitespace: bool = True

    def __post_init__(self) -> None:
        validate_chunking(self.chunk_size, self.chunk_overlap)
        if self.top_k < 1:
            raise InvalidConfigurationError(f"top_k must be at least 1, got {self.top_k}")
        if self.max_citations < 0:
            raise InvalidConfigurationError(
                f"max_citations must be non-negative, got {self.max_citations}"
            )
        # Resolving the scorer validates both its name and term length.
        get_scorer(self.scorer, min_term_length=self.min_term_length)

    @classmethod
    def from_env(cls) -> "RetrievalSettings":
        defaults = cls()
        return cls(
            chunk_size=_int_from_env("DOCQA_CHUNK_SIZE", defaults.chunk_size),
            chunk_overlap=_int_from_env("DOCQA_CHUNK_OVERLAP", defaults.chunk_overlap),
            top_k=_int_from_env("DOCQA_TOP_K", defaults.top_k),
            max_citations=_int_from_env("DOCQA_MAX_CITATIONS", defaults.max_citations),
            scorer=os.getenv("DOCQA_SCORER", defaults.scorer).strip().lower() or defaults.scorer,
            min_term_length=_int_from_env("DOCQA_MIN_TERM_LENGTH", defaults.min_term_length),
            normalize_whitespace=_bool_from_env(
                "DOCQA_NORMALIZE_WHITESPACE", defaults.normalize_whitespace
            ),
        )


@lru_cache()
def get_settings() -> RetrievalSettings:
    """Return settings loaded once from the environment."""

    return RetrievalSettings.from_env()


def reset_settings_cache() -> None:
    """Clear the cached settings (primarily for testing)."""

    get_settings.cache_clear()  # type: ignore[attr-defined]


__all__ = ["RetrievalSettings", "get_settings", "reset_settings_cache"]
