"""Shared fixtures for the retrieval engine tests."""
from __future__ import annotations

import pytest

from docqa.config import RetrievalSettings, reset_settings_cache
from docqa.index import PassageIndex
from docqa.models import Passage
from docqa.retrieval import DocumentRetriever


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    for name in (
        "DOCQA_CHUNK_SIZE",
        "DOCQA_CHUNK_OVERLAP",
        "DOCQA_TOP_K",
        "DOCQA_MAX_CITATIONS",
        "DOCQA_SCORER",
        "DOCQA_MIN_TERM_LENGTH",
        "DOCQA_NORMALIZE_WHITESPACE",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def anyio_backend():
    return "asyncio"


def _build_passages(texts, page_step: int = 0) -> list[Passage]:
    passages = []
    offset = 0
    for index, text in enumerate(texts):
        passages.append(
            Passage(
                text=text,
                start_offset=offset,
                end_offset=offset + len(text),
                estimated_page=1 + index * page_step,
            )
        )
        offset += len(text)
    return passages


@pytest.fixture
def make_passages():
    return _build_passages


@pytest.fixture
def animal_passages() -> list[Passage]:
    return _build_passages(["the cat sat", "a dog ran fast", "the cat and the dog"])


@pytest.fixture
def populated_index(animal_passages) -> PassageIndex:
    index = PassageIndex()
    index.replace(animal_passages)
    return index


@pytest.fixture
def retriever() -> DocumentRetriever:
    return DocumentRetriever(settings=RetrievalSettings())
