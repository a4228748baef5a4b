"""ElevenLabs text-to-speech provider.

Calls the ElevenLabs REST API directly over ``httpx``:

    POST {base}/text-to-speech/{voice_id}   → MP3 bytes
    GET  {base}/voices                      → voice catalogue

The requested :class:`AudioQuality` tier selects the synthesis model via a
quality→model table (configurable in ``config/config.yaml``).
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from src.interfaces.speech_provider import ISpeechProvider
from src.models.user import AudioQuality, Voice
from src.utils.errors import SpeechSynthesisError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_BASE_URL = "https://api.elevenlabs.io/v1"
_DEFAULT_TIMEOUT = 60.0

DEFAULT_QUALITY_MODELS: dict[str, str] = {
    AudioQuality.STANDARD.value: "eleven_monolingual_v1",
    AudioQuality.HIGH.value: "eleven_monolingual_v1",
    AudioQuality.PREMIUM.value: "eleven_multilingual_v2",
}

DEFAULT_VOICE_SETTINGS: dict[str, float] = {
    "stability": 0.5,
    "similarity_boost": 0.5,
}


class ElevenLabsSpeechProvider(ISpeechProvider):
    """Speech synthesis via the ElevenLabs HTTP API."""

    def __init__(
        self,
        api_key: str,
        http_client: httpx.AsyncClient | None = None,
        base_url: str = _DEFAULT_BASE_URL,
        quality_models: dict[str, str] | None = None,
        voice_settings: dict[str, float] | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(_DEFAULT_TIMEOUT)
        )
        self._quality_models = {**DEFAULT_QUALITY_MODELS, **(quality_models or {})}
        self._voice_settings = voice_settings or dict(DEFAULT_VOICE_SETTINGS)

    def model_for(self, quality: AudioQuality | str | None) -> str:
        """Return the synthesis model for *quality*; unknown tiers use standard."""
        tier = AudioQuality.parse(quality)
        return self._quality_models.get(
            tier.value, self._quality_models[AudioQuality.STANDARD.value]
        )

    async def synthesize(
        self,
        text: str,
        voice_id: str,
        quality: AudioQuality,
    ) -> bytes:
        model_id = self.model_for(quality)
        try:
            response = await self._client.post(
                f"{self._base_url}/text-to-speech/{voice_id}",
                json={
                    "text": text,
                    "model_id": model_id,
                    "voice_settings": self._voice_settings,
                },
                headers={
                    "Accept": "audio/mpeg",
                    "xi-api-key": self._api_key,
                },
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise SpeechSynthesisError(
                message=f"HTTP {exc.response.status_code} from text-to-speech",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise SpeechSynthesisError(
                message=f"Text-to-speech request failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        audio = response.content
        if not audio:
            raise SpeechSynthesisError(
                message="Text-to-speech returned no audio",
                provider_name=self.get_provider_name(),
            )
        logger.info(
            "speech_synthesized",
            voice_id=voice_id,
            model=model_id,
            chars=len(text),
            bytes=len(audio),
        )
        return audio

    async def list_voices(self) -> list[Voice]:
        """Return English voices from the ElevenLabs catalogue."""
        try:
            response = await self._client.get(
                f"{self._base_url}/voices",
                headers={"xi-api-key": self._api_key},
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise SpeechSynthesisError(
                message=f"Failed to fetch voices: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except ValueError as exc:
            raise SpeechSynthesisError(
                message="Voice catalogue was not valid JSON",
                provider_name=self.get_provider_name(),
            ) from exc

        voices = [
            _parse_voice(item)
            for item in payload.get("voices", [])
            if _is_english(item)
        ]
        logger.debug("voices_listed", count=len(voices))
        return voices

    def get_provider_name(self) -> str:
        return "elevenlabs"


def _is_english(item: dict[str, Any]) -> bool:
    labels = item.get("labels") or {}
    name = str(item.get("name", ""))
    return labels.get("language") == "en" or "english" in name.lower()


def _parse_voice(item: dict[str, Any]) -> Voice:
    labels = item.get("labels") or {}
    return Voice(
        voice_id=item["voice_id"],
        name=item.get("name", ""),
        category=item.get("category"),
        labels={str(k): str(v) for k, v in labels.items()},
        preview_url=item.get("preview_url"),
    )
