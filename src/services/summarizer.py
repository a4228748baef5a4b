"""Narration summary service.

Condenses extracted document text into a summary suitable for being read
aloud.  Prompting lives here so that the LLM adapter stays a thin transport
and can be swapped (OpenAI, any OpenAI-compatible server) without touching
the wording.
"""

from __future__ import annotations

from src.interfaces.llm_provider import ILLMProvider
from src.utils.errors import LLMError
from src.utils.logging import get_logger

SUMMARY_SYSTEM_PROMPT = (
    "You are a professional summarizer. Create a comprehensive but concise "
    "summary of the provided text. Focus on key points, main arguments, and "
    "important details. The summary should be engaging and suitable for audio "
    "narration."
)

SUMMARY_USER_PROMPT = "Please summarize the following text:\n\n{text}"


class SummarizerService:
    """Produces narration-ready summaries through an :class:`ILLMProvider`."""

    def __init__(
        self,
        llm_provider: ILLMProvider,
        max_tokens: int = 2000,
        temperature: float = 0.3,
        system_prompt: str = SUMMARY_SYSTEM_PROMPT,
    ) -> None:
        self._llm = llm_provider
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._system_prompt = system_prompt
        self._logger = get_logger(__name__)

    async def summarize(self, text: str) -> str:
        """Return a non-empty summary of *text*.

        Raises
        ------
        LLMError
            If the provider fails or answers with an empty completion.
        """
        summary = await self._llm.complete(
            system_prompt=self._system_prompt,
            user_prompt=SUMMARY_USER_PROMPT.format(text=text),
            temperature=self._temperature,
            max_tokens=self._max_tokens,
        )
        summary = (summary or "").strip()
        if not summary:
            raise LLMError(
                message="Summarizer returned an empty summary",
                provider_name=self._llm.get_provider_name(),
            )
        self._logger.info(
            "summary_generated",
            provider=self._llm.get_provider_name(),
            input_chars=len(text),
            summary_chars=len(summary),
        )
        return summary
