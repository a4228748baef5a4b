"""Abstract base class for per-user narration preference storage."""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.user import UserSettings, UserSettingsUpdate


class IUserSettingsProvider(ABC):
    """Contract for user profile / preference persistence."""

    @abstractmethod
    async def get_settings(self, user_id: str) -> UserSettings:
        """Return the stored settings for *user_id*.

        Users with no stored row get the defaults (``audio_quality=high``
        and the default narrator voice).
        """

    @abstractmethod
    async def update_settings(
        self,
        user_id: str,
        update: UserSettingsUpdate,
        email: str = "",
    ) -> UserSettings:
        """Apply the non-``None`` fields of *update* and return the result."""

    @abstractmethod
    async def initialize(self) -> None:
        """Create tables if they don't exist.  Called at startup."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
