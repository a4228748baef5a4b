"""SQLite-backed file record provider.

Persists one row per narrated upload to a local SQLite database at
``data/files.db``.  Uses ``aiosqlite`` for async I/O.  Timestamps are
stored as UTC ISO-8601 strings so they sort lexicographically.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from pathlib import Path

import aiosqlite
import structlog

from src.interfaces.file_record_provider import IFileRecordProvider
from src.models.files import FileRecord, NewFileRecord
from src.utils.errors import NotFoundError, RecordStoreError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_DB_PATH = Path("data/files.db")

_CREATE_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS files (
    id                 TEXT    PRIMARY KEY,
    user_id            TEXT    NOT NULL,
    original_filename  TEXT    NOT NULL,
    file_size          INTEGER NOT NULL,
    audio_url          TEXT    NOT NULL,
    audio_duration     INTEGER NOT NULL,
    summary            TEXT    NOT NULL,
    listen_count       INTEGER NOT NULL DEFAULT 0,
    last_listened_at   TEXT,
    created_at         TEXT    NOT NULL
);
"""

_CREATE_INDICES_SQL = [
    "CREATE INDEX IF NOT EXISTS idx_files_user_created ON files(user_id, created_at);",
]

_COLUMNS = (
    "id, user_id, original_filename, file_size, audio_url, audio_duration, "
    "summary, listen_count, last_listened_at, created_at"
)


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


def _row_to_record(row: aiosqlite.Row) -> FileRecord:
    return FileRecord(
        id=row["id"],
        user_id=row["user_id"],
        original_filename=row["original_filename"],
        file_size=row["file_size"],
        audio_url=row["audio_url"],
        audio_duration=row["audio_duration"],
        summary=row["summary"],
        listen_count=row["listen_count"],
        last_listened_at=row["last_listened_at"],
        created_at=row["created_at"],
    )


class SQLiteFileRecordProvider(IFileRecordProvider):
    """SQLite-backed file record persistence."""

    def __init__(self, db_path: str | Path = _DEFAULT_DB_PATH) -> None:
        self._db_path = Path(db_path)

    async def initialize(self) -> None:
        """Create the files table and indices if they don't exist."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        async with aiosqlite.connect(str(self._db_path)) as db:
            await db.execute(_CREATE_TABLE_SQL)
            for idx_sql in _CREATE_INDICES_SQL:
                await db.execute(idx_sql)
            await db.commit()
        logger.info("records_db_initialized", path=str(self._db_path))

    async def insert(self, record: NewFileRecord) -> FileRecord:
        record_id = str(uuid.uuid4())
        created_at = _utcnow()
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                await db.execute(
                    f"INSERT INTO files ({_COLUMNS}) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                    (
                        record_id,
                        record.user_id,
                        record.original_filename,
                        record.file_size,
                        record.audio_url,
                        record.audio_duration,
                        record.summary,
                        record.listen_count,
                        None,
                        created_at,
                    ),
                )
                await db.commit()
        except aiosqlite.Error as exc:
            raise RecordStoreError(
                message=f"Insert failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        logger.info("file_record_inserted", file_id=record_id, user_id=record.user_id)
        return FileRecord(
            id=record_id,
            created_at=created_at,
            **record.model_dump(),
        )

    async def get(self, record_id: str) -> FileRecord | None:
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                db.row_factory = aiosqlite.Row
                cursor = await db.execute(
                    f"SELECT {_COLUMNS} FROM files WHERE id = ?",
                    (record_id,),
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as exc:
            raise RecordStoreError(
                message=f"Lookup failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        return _row_to_record(row) if row else None

    async def list_by_user(self, user_id: str) -> list[FileRecord]:
        """Return all records for *user_id*, newest first."""
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                db.row_factory = aiosqlite.Row
                cursor = await db.execute(
                    f"SELECT {_COLUMNS} FROM files WHERE user_id = ? "
                    "ORDER BY created_at DESC, rowid DESC",
                    (user_id,),
                )
                rows = await cursor.fetchall()
        except aiosqlite.Error as exc:
            raise RecordStoreError(
                message=f"List failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        return [_row_to_record(r) for r in rows]

    async def delete(self, record_id: str) -> None:
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                await db.execute("DELETE FROM files WHERE id = ?", (record_id,))
                await db.commit()
        except aiosqlite.Error as exc:
            raise RecordStoreError(
                message=f"Delete failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        logger.info("file_record_deleted", file_id=record_id)

    async def increment_listen_count(self, record_id: str) -> None:
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                cursor = await db.execute(
                    "UPDATE files SET listen_count = listen_count + 1, "
                    "last_listened_at = ? WHERE id = ?",
                    (_utcnow(), record_id),
                )
                await db.commit()
                updated = cursor.rowcount
        except aiosqlite.Error as exc:
            raise RecordStoreError(
                message=f"Listen update failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        if not updated:
            raise NotFoundError()

    def get_provider_name(self) -> str:
        return "sqlite-records"
