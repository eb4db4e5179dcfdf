"""Answer-generation providers."""

from .base import LLMProvider
from .mock_llm import MockLLMProvider

__all__ = ["LLMProvider", "MockLLMProvider"]
