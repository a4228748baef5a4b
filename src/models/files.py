"""File record and upload models.

Defines Pydantic v2 models for the per-user file records kept by the record
store, their list-view projection (the value cached per user), and the
ephemeral upload request/result values of the ingestion pipeline.

Lifecycle of a record:
    1. The ingestion pipeline builds a :class:`NewFileRecord` and inserts it.
    2. The record store assigns ``id`` / ``created_at`` and returns a
       :class:`FileRecord`.
    3. Listen tracking bumps ``listen_count`` / ``last_listened_at``;
       deletion removes the row.  The pipeline never mutates a record.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ACCEPTED_MIME_TYPE = "application/pdf"


class UploadMetadata(BaseModel):
    """Caller-declared facts about an upload, as received by the HTTP layer."""

    model_config = ConfigDict(frozen=True)

    original_name: str
    # Size as declared by the multipart part; the record always stores the
    # real byte length instead.
    declared_size: int = Field(default=0, ge=0)
    mime_type: str = ACCEPTED_MIME_TYPE


class UploadResult(BaseModel):
    """Response value of a successful upload.  Not persisted separately."""

    model_config = ConfigDict(frozen=True)

    summary: str
    audio_url: str
    duration: int = Field(ge=0, description="Estimated narration length in seconds")
    file_size: int = Field(ge=0, description="Upload size in bytes")


class NewFileRecord(BaseModel):
    """Insert payload for the record store (identity and timestamps are store-assigned)."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    original_filename: str
    file_size: int = Field(ge=0)
    audio_url: str
    audio_duration: int = Field(ge=0)
    summary: str
    listen_count: int = Field(default=0, ge=0)


class FileRecord(BaseModel):
    """A persisted file record, owned by the record store."""

    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str
    original_filename: str
    file_size: int = Field(ge=0)
    audio_url: str
    audio_duration: int = Field(ge=0)
    summary: str
    created_at: datetime
    listen_count: int = Field(default=0, ge=0)
    last_listened_at: datetime | None = None

    def to_list_item(self) -> FileListItem:
        """Project this record onto the list view returned by ``GET /files``."""
        return FileListItem(
            id=self.id,
            filename=self.original_filename,
            summary=self.summary,
            audio_url=self.audio_url,
            created_at=self.created_at,
            listen_count=self.listen_count,
            audio_duration=self.audio_duration,
            file_size=self.file_size,
        )


class FileListItem(BaseModel):
    """List-view projection of a :class:`FileRecord`.

    Instances are cached as plain JSON-mode dicts (see
    :meth:`to_cache_value`) so a network cache such as Redis can hold them.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    filename: str
    summary: str
    audio_url: str
    created_at: datetime
    listen_count: int = 0
    audio_duration: int = 0
    file_size: int = 0

    def to_cache_value(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
