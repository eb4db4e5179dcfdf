"""Lexical relevance scoring between a query and a passage.

Two strategies are available and a ranking always uses exactly one of them:

``keyword``
    Counts case-insensitive literal occurrences of each query term in the
    passage. Terms shorter than ``min_term_length`` are ignored. This is the
    default used for live query ranking.

``cosine``
    Cosine similarity of whitespace-token count vectors over the union
    vocabulary of both texts. Symmetric, so it also fits passage-to-passage
    comparison.
"""
from __future__ import annotations

import math
from collections import Counter
from typing import Callable, Dict, List, Protocol

from docqa.errors import InvalidConfigurationError

DEFAULT_MIN_TERM_LENGTH = 3


def tokenize(text: str | None) -> List[str]:
    """Lower-case *text* and split it on whitespace."""

    if not text:
        return []
    return text.lower().split()


def cosine_similarity(text_a: str | None, text_b: str | None) -> float:
    """Return the term-frequency cosine similarity of two texts.

    Returns ``0.0`` when either text has no tokens.
    """

    counts_a = Counter(tokenize(text_a))
    counts_b = Counter(tokenize(text_b))
    if not counts_a or not counts_b:
        return 0.0

    vocabulary = counts_a.keys() | counts_b.keys()
    dot_product = sum(counts_a[token] * counts_b[token] for token in vocabulary)
    # Integer arithmetic up to the final division keeps score(a, a) == 1.0 exact.
    norm_product = sum(count * count for count in counts_a.values()) * sum(
        count * count for count in counts_b.values()
    )
    if dot_product == 0 or norm_product == 0:
        return 0.0
    return dot_product / math.sqrt(norm_product)


def query_terms(query: str | None, min_term_length: int = DEFAULT_MIN_TERM_LENGTH) -> List[str]:
    """Return the lower-cased query terms that take part in keyword matching."""

    return [term for term in tokenize(query) if len(term) >= min_term_length]


def keyword_match_score(
    query: str | None,
    text: str | None,
    min_term_length: int = DEFAULT_MIN_TERM_LENGTH,
) -> float:
    """Sum the occurrences of every query term inside *text*.

    Matching is case-insensitive and literal: regex metacharacters in the query
    carry no special meaning.
    """

    if not text:
        return 0.0
    lowered = text.lower()
    return float(sum(lowered.count(term) for term in query_terms(query, min_term_length)))


class PassageScorer(Protocol):
    """Contract shared by the scoring strategies."""

    name: str

    def score(self, query: str, text: str) -> float:
        """Return a non-negative relevance score of *text* for *query*."""


class KeywordMatchScorer:
    """Rank passages by literal query-term occurrence counts."""

    name = "keyword"

    def __init__(self, min_term_length: int = DEFAULT_MIN_TERM_LENGTH) -> None:
        if min_term_length < 1:
            raise InvalidConfigurationError(
                f"min_term_length must be at least 1, got {min_term_length}"
            )
        self.min_term_length = min_term_length

    def score(self, query: str, text: str) -> float:
        return keyword_match_score(query, text, self.min_term_length)

    def __repr__(self) -> str:
        return f"KeywordMatchScorer(min_term_length={self.min_term_length})"


class CosineSimilarityScorer:
    """Rank passages by term-frequency cosine similarity."""

    name = "cosine"

    def score(self, query: str, text: str) -> float:
        return cosine_similarity(query, text)

    def __repr__(self) -> str:
        return "CosineSimilarityScorer()"


_SCORER_FACTORIES: Dict[str, Callable[[int], PassageScorer]] = {
    KeywordMatchScorer.name: lambda min_term_length: KeywordMatchScorer(min_term_length),
    CosineSimilarityScorer.name: lambda _min_term_length: CosineSimilarityScorer(),
}


def get_scorer(name: str, *, min_term_length: int = DEFAULT_MIN_TERM_LENGTH) -> PassageScorer:
    """Return the scorer registered under *name* (``keyword`` or ``cosine``)."""

    key = (name or "").strip().lower()
    try:
        factory = _SCORER_FACTORIES[key]
    except KeyError:
        available = ", ".join(sorted(_SCORER_FACTORIES))
        raise InvalidConfigurationError(
            f"Unsupported scorer {name!r}; expected one of: {available}"
        ) from None
    return factory(min_term_length)


__all__ = [
    "CosineSimilarityScorer",
    "DEFAULT_MIN_TERM_LENGTH",
    "KeywordMatchScorer",
    "PassageScorer",
    "cosine_similarity",
    "get_scorer",
    "keyword_match_score",
    "query_terms",
    "tokenize",
]
