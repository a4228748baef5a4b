"""Text-to-speech providers."""

from src.providers.speech.elevenlabs_provider import ElevenLabsSpeechProvider

__all__ = ["ElevenLabsSpeechProvider"]
