"""SQLite-backed user settings provider.

Stores one row of narration preferences per user at
``data/user_settings.db``.  A user without a row gets the defaults from
:class:`UserSettings`; the first update creates the row.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import aiosqlite
import structlog

from src.interfaces.user_settings_provider import IUserSettingsProvider
from src.models.user import AudioQuality, UserSettings, UserSettingsUpdate
from src.utils.errors import RecordStoreError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_DB_PATH = Path("data/user_settings.db")

_CREATE_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS user_settings (
    user_id        TEXT PRIMARY KEY,
    full_name      TEXT NOT NULL DEFAULT '',
    email          TEXT NOT NULL DEFAULT '',
    audio_quality  TEXT NOT NULL,
    voice_id       TEXT NOT NULL,
    updated_at     TEXT NOT NULL
);
"""

_UPSERT_SQL = """\
INSERT INTO user_settings (user_id, full_name, email, audio_quality, voice_id, updated_at)
VALUES (?, ?, ?, ?, ?, ?)
ON CONFLICT(user_id)
DO UPDATE SET full_name     = excluded.full_name,
              email         = excluded.email,
              audio_quality = excluded.audio_quality,
              voice_id      = excluded.voice_id,
              updated_at    = excluded.updated_at;
"""


class SQLiteUserSettingsProvider(IUserSettingsProvider):
    """SQLite-backed narration preference persistence."""

    def __init__(self, db_path: str | Path = _DEFAULT_DB_PATH) -> None:
        self._db_path = Path(db_path)

    async def initialize(self) -> None:
        """Create the user_settings table if it doesn't exist."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        async with aiosqlite.connect(str(self._db_path)) as db:
            await db.execute(_CREATE_TABLE_SQL)
            await db.commit()
        logger.info("settings_db_initialized", path=str(self._db_path))

    async def _fetch(self, user_id: str) -> UserSettings | None:
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                db.row_factory = aiosqlite.Row
                cursor = await db.execute(
                    "SELECT full_name, email, audio_quality, voice_id "
                    "FROM user_settings WHERE user_id = ?",
                    (user_id,),
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as exc:
            raise RecordStoreError(
                message=f"Settings lookup failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        if row is None:
            return None
        return UserSettings(
            full_name=row["full_name"],
            email=row["email"],
            audio_quality=AudioQuality.parse(row["audio_quality"]),
            voice_id=row["voice_id"],
        )

    async def get_settings(self, user_id: str) -> UserSettings:
        return await self._fetch(user_id) or UserSettings()

    async def update_settings(
        self,
        user_id: str,
        update: UserSettingsUpdate,
        email: str = "",
    ) -> UserSettings:
        current = await self._fetch(user_id) or UserSettings(email=email)
        changes = update.model_dump(exclude_none=True)
        if email and not current.email:
            changes["email"] = email
        merged = current.model_copy(update=changes)

        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                await db.execute(
                    _UPSERT_SQL,
                    (
                        user_id,
                        merged.full_name,
                        merged.email,
                        AudioQuality.parse(merged.audio_quality).value,
                        merged.voice_id,
                        datetime.now(timezone.utc).isoformat(),
                    ),
                )
                await db.commit()
        except aiosqlite.Error as exc:
            raise RecordStoreError(
                message=f"Settings update failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        logger.info("user_settings_updated", user_id=user_id, fields=sorted(changes))
        return merged

    def get_provider_name(self) -> str:
        return "sqlite-settings"
