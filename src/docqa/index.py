"""In-memory passage index for the currently loaded document."""
from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from docqa.models import Passage, ScoredPassage
from docqa.scoring import KeywordMatchScorer, PassageScorer

LOGGER = logging.getLogger(__name__)


class IndexState(str, Enum):
    EMPTY = "empty"
    POPULATED = "populated"


class PassageIndex:
    """Hold one document's passages and rank them against queries.

    Writers build a complete tuple and swap a single reference under a lock;
    readers take that reference once, so a search always works on either the
    whole old passage set or the whole new one.
    """

    def __init__(self, scorer: Optional[PassageScorer] = None) -> None:
        self.scorer: PassageScorer = scorer or KeywordMatchScorer()
        self._passages: Tuple[Passage, ...] = ()
        self._write_lock = threading.Lock()

    @property
    def state(self) -> IndexState:
        return IndexState.POPULATED if self._passages else IndexState.EMPTY

    @property
    def is_empty(self) -> bool:
        return not self._passages

    def __len__(self) -> int:
        return len(self._passages)

    def snapshot(self) -> Tuple[Passage, ...]:
        """Return the immutable passage tuple; ids are tuple positions."""

        return self._passages

    def replace(self, passages: Iterable[Passage]) -> None:
        """Discard any held passages and store *passages* with ids 0..n-1."""

        snapshot = tuple(passages)
        with self._write_lock:
            previous = len(self._passages)
            self._passages = snapshot
        LOGGER.info("Replaced index contents (%s -> %s passages)", previous, len(snapshot))

    def clear(self) -> None:
        with self._write_lock:
            previous = len(self._passages)
            self._passages = ()
        LOGGER.info("Cleared index (%s passages discarded)", previous)

    def search(self, query: str, k: int) -> List[ScoredPassage]:
        """Return the *k* best passages for *query*.

        Results are ordered by descending score; equal scores keep insertion
        order so repeated identical queries return identical output.
        """

        passages = self._passages
        if not passages or k <= 0:
            return []

        scored = [
            ScoredPassage(passage_id=passage_id, passage=passage, score=self.scorer.score(query, passage.text))
            for passage_id, passage in enumerate(passages)
        ]
        scored.sort(key=lambda item: (-item.score, item.passage_id))
        results = scored[:k]
        LOGGER.debug(
            "Search with %s scorer over %s passages returned ids %s",
            self.scorer.name,
            len(passages),
            [item.passage_id for item in results],
        )
        return results


__all__ = ["IndexState", "PassageIndex"]
