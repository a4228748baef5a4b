"""User narration preferences and the voice catalogue."""

from __future__ import annotations

from src.interfaces.speech_provider import ISpeechProvider
from src.interfaces.user_settings_provider import IUserSettingsProvider
from src.models.user import AuthenticatedUser, UserSettings, UserSettingsUpdate, Voice
from src.utils.logging import get_logger


class SettingsService:
    def __init__(
        self,
        settings_provider: IUserSettingsProvider,
        speech_provider: ISpeechProvider,
    ) -> None:
        self._settings = settings_provider
        self._speech = speech_provider
        self._logger = get_logger(__name__)

    async def get_settings(self, user: AuthenticatedUser) -> UserSettings:
        settings = await self._settings.get_settings(user.id)
        # A user who never saved settings still sees their account email.
        if not settings.email and user.email:
            settings = settings.model_copy(update={"email": user.email})
        return settings

    async def update_settings(
        self,
        user: AuthenticatedUser,
        update: UserSettingsUpdate,
    ) -> UserSettings:
        return await self._settings.update_settings(user.id, update, email=user.email)

    async def list_voices(self) -> list[Voice]:
        voices = await self._speech.list_voices()
        self._logger.debug("voices_fetched", count=len(voices))
        return voices
