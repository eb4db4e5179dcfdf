"""Workflows built on top of the retrieval engine."""

from .qa import AnswerResponse, CitationModel, DocumentQAService, SourcePassage

__all__ = ["AnswerResponse", "CitationModel", "DocumentQAService", "SourcePassage"]
