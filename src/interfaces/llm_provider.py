"""Contract for the text-completion backend behind the summarizer.

The summarizer sends one system prompt (how to summarize for narration)
and one user prompt (the extracted document text) and expects plain text
back.  Whether an empty answer is acceptable is the summarizer's call, so
implementations return ``""`` rather than raising for it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementations: OpenAILLMProvider
# Located in: src/providers/llm/
class ILLMProvider(ABC):
    """Single-turn chat completion."""

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 2000,
    ) -> str:
        """Return the model's reply to *user_prompt* under *system_prompt*.

        Raises
        ------
        src.utils.errors.LLMError
            The request failed, timed out, or returned no choices.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the backend label, e.g. ``"openai"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` when an API key is configured."""
