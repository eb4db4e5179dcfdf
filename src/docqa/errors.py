"""Common exceptions raised by the retrieval engine and its consumers."""
from __future__ import annotations


class DocQAError(Exception):
    """Base class for all errors raised by :mod:`docqa`."""


class InvalidConfigurationError(DocQAError, ValueError):
    """Raised when chunking or scoring parameters are unusable."""


class DocumentNotLoadedError(DocQAError, RuntimeError):
    """Raised when a question is asked before any document was ingested."""


class AnswerGenerationError(DocQAError, RuntimeError):
    """Raised when the answer provider fails to produce a completion."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.__cause__ = cause


__all__ = [
    "AnswerGenerationError",
    "DocQAError",
    "DocumentNotLoadedError",
    "InvalidConfigurationError",
]
