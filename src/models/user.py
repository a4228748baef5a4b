"""User identity and narration preference models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_VOICE_ID = "9BWtsMINqrJLrRacOk9x"


class AudioQuality(str, Enum):  # noqa: UP042 (StrEnum requires Python 3.11+)
    """Named synthesis quality tiers, cheapest first."""

    STANDARD = "standard"
    HIGH = "high"
    PREMIUM = "premium"

    @classmethod
    def parse(cls, value: str | AudioQuality | None) -> AudioQuality:
        """Return the tier for *value*; unknown or unset values map to STANDARD."""
        if isinstance(value, AudioQuality):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.STANDARD


class AuthenticatedUser(BaseModel):
    """Identity returned by the identity provider for a verified bearer token."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str = ""


class UserSettings(BaseModel):
    """A user's profile and narration preferences."""

    model_config = ConfigDict(frozen=True)

    full_name: str = ""
    email: str = ""
    audio_quality: AudioQuality = AudioQuality.HIGH
    voice_id: str = DEFAULT_VOICE_ID


class UserSettingsUpdate(BaseModel):
    """Partial update - ``None`` fields keep their stored value."""

    full_name: str | None = Field(default=None, max_length=200)
    audio_quality: AudioQuality | None = None
    voice_id: str | None = Field(default=None, min_length=1, max_length=64)


class Voice(BaseModel):
    """A synthesis voice offered by the speech provider."""

    model_config = ConfigDict(frozen=True)

    voice_id: str
    name: str
    category: str | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    preview_url: str | None = None
