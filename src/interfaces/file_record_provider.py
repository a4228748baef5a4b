"""Abstract base class for the per-user file record store.

Records are the durable trace of a completed upload.  The ingestion
pipeline only ever inserts; listing, deletion and listen tracking are
driven by :class:`src.services.file_service.FileService`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.files import FileRecord, NewFileRecord


class IFileRecordProvider(ABC):
    """Contract for file-record persistence.

    All operations are async to support network-backed stores.  Failures
    raise :class:`src.utils.errors.RecordStoreError`.
    """

    @abstractmethod
    async def insert(self, record: NewFileRecord) -> FileRecord:
        """Persist *record*, assigning ``id`` and ``created_at``."""

    @abstractmethod
    async def get(self, record_id: str) -> FileRecord | None:
        """Return the record with *record_id*, or ``None``."""

    @abstractmethod
    async def list_by_user(self, user_id: str) -> list[FileRecord]:
        """Return all records owned by *user_id*, newest first."""

    @abstractmethod
    async def delete(self, record_id: str) -> None:
        """Remove the record with *record_id*.  No-op if absent."""

    @abstractmethod
    async def increment_listen_count(self, record_id: str) -> None:
        """Atomically bump ``listen_count`` and stamp ``last_listened_at``."""

    @abstractmethod
    async def initialize(self) -> None:
        """Create tables/indices if they don't exist.  Called at startup."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
