"""Mock LLM provider that echoes prompts for deterministic testing."""
from __future__ import annotations

from .base import LLMProvider


class MockLLMProvider(LLMProvider):
    """Return a deterministic response for any prompt."""

    model_name = "mock"

    def __init__(self) -> None:
        self.prompts: list[str] = []

    def generate(self, prompt: str, max_tokens: int = 1024) -> str:
        """Generate a canned response with a predictable prefix."""

        del max_tokens  # Unused in the mock implementation.
        self.prompts.append(prompt)
        return f"MOCK_ANSWER: {prompt[:100]}"
