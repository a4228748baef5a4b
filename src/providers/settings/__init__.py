"""User preference store providers."""

from src.providers.settings.sqlite_user_settings_provider import SQLiteUserSettingsProvider

__all__ = ["SQLiteUserSettingsProvider"]
