"""Base interface for answer-generation providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Awaitable

__all__ = ["LLMProvider"]


class LLMProvider(ABC):
    """Abstract interface for large language model providers."""

    model_name: str = "unknown"

    @abstractmethod
    def generate(self, prompt: str, max_tokens: int = 1024) -> str | Awaitable[str]:
        """Generate text from the given prompt."""
