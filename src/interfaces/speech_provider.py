"""Abstract base class for text-to-speech providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.user import AudioQuality, Voice


class ISpeechProvider(ABC):
    """Contract for text-to-speech synthesis services."""

    @abstractmethod
    async def synthesize(
        self,
        text: str,
        voice_id: str,
        quality: AudioQuality,
    ) -> bytes:
        """Render *text* as encoded audio (MP3) using *voice_id*.

        *quality* selects the synthesis model tier.

        Raises
        ------
        src.utils.errors.SpeechSynthesisError
            If the provider rejects the request or is unreachable.
        """

    @abstractmethod
    async def list_voices(self) -> list[Voice]:
        """Return the voices available for narration."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
