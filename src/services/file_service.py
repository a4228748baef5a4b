"""File listing, deletion, and listen tracking for narrated uploads.

Every mutation follows the same order: record store / object store first,
list-cache invalidation last and only on success.  A record owned by a
different user is reported exactly like a missing one.
"""

from __future__ import annotations

from src.interfaces.file_record_provider import IFileRecordProvider
from src.interfaces.object_store import IObjectStore
from src.models.files import FileListItem, FileRecord
from src.services.file_list_cache import FileListCache
from src.utils.errors import NotFoundError
from src.utils.logging import get_logger


class FileService:
    """Read and lifecycle operations on a user's file records."""

    def __init__(
        self,
        records: IFileRecordProvider,
        object_store: IObjectStore,
        list_cache: FileListCache,
    ) -> None:
        self._records = records
        self._object_store = object_store
        self._list_cache = list_cache
        self._logger = get_logger(__name__)

    async def list_files(self, user_id: str) -> list[FileListItem]:
        """Return *user_id*'s files, newest first (cache-aside)."""
        cached = await self._list_cache.get(user_id)
        if cached is not None:
            self._logger.debug("file_list_cache_hit", user_id=user_id)
            return cached

        records = await self._records.list_by_user(user_id)
        items = [r.to_list_item() for r in records]
        await self._list_cache.set(user_id, items)
        self._logger.debug("file_list_loaded", user_id=user_id, count=len(items))
        return items

    async def _get_owned(self, user_id: str, file_id: str) -> FileRecord:
        record = await self._records.get(file_id)
        if record is None or record.user_id != user_id:
            raise NotFoundError()
        return record

    async def delete_file(self, user_id: str, file_id: str) -> None:
        """Delete the audio object, then the record, then the cached list.

        A storage failure aborts before the record is touched, so a record
        never points at audio that was only partly removed.
        """
        record = await self._get_owned(user_id, file_id)
        object_name = self._object_store.name_from_url(record.audio_url)
        await self._object_store.delete(object_name)
        await self._records.delete(record.id)
        await self._list_cache.invalidate(user_id)
        self._logger.info("file_deleted", user_id=user_id, file_id=file_id)

    async def record_listen(self, user_id: str, file_id: str) -> None:
        """Count one playback of *file_id*."""
        record = await self._get_owned(user_id, file_id)
        await self._records.increment_listen_count(record.id)
        await self._list_cache.invalidate(user_id)
        self._logger.info("file_listened", user_id=user_id, file_id=file_id)
