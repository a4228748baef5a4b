"""Per-user file list cache.

Wraps an :class:`ICacheProvider` with the consistency rules for the
``GET /files`` snapshot:

* the key for a user is ``files:{user_id}:list``;
* the value is the user's list items, newest first, as plain dicts;
* every successful mutation calls :meth:`FileListCache.invalidate` after
  the record store has committed.

The cache is an optimisation.  Provider faults are logged at WARNING and
reported as a miss (reads) or ignored (writes, invalidation); they never
fail the operation that triggered them.
"""

from __future__ import annotations

from typing import Any

from src.interfaces.cache_provider import ICacheProvider
from src.models.files import FileListItem
from src.utils.logging import get_logger

FILES_PREFIX = "files"
LIST_SUFFIX = "list"
DEFAULT_TTL_SECONDS = 60 * 60 * 24


def build_cache_key(prefix: str, *parts: str) -> str:
    """Join *prefix* and *parts* with ``:``, e.g. ``files:u-1:list``."""
    return ":".join([prefix, *(str(p) for p in parts)])


class FileListCache:
    """Best-effort cache of each user's file list."""

    def __init__(self, cache: ICacheProvider, ttl: int = DEFAULT_TTL_SECONDS) -> None:
        self._cache = cache
        self._ttl = ttl
        self._logger = get_logger(__name__)

    @staticmethod
    def key_for(user_id: str) -> str:
        return build_cache_key(FILES_PREFIX, user_id, LIST_SUFFIX)

    async def get(self, user_id: str) -> list[FileListItem] | None:
        """Return the cached list for *user_id*, or ``None`` on miss or fault."""
        key = self.key_for(user_id)
        try:
            raw: Any = await self._cache.get(key)
        except Exception as exc:
            self._logger.warning("file_list_cache_get_failed", key=key, error=str(exc))
            return None
        if raw is None:
            return None
        try:
            return [FileListItem.model_validate(item) for item in raw]
        except (TypeError, ValueError) as exc:
            # Unreadable entry; drop it so the next read repopulates.
            self._logger.warning("file_list_cache_corrupt", key=key, error=str(exc))
            await self.invalidate(user_id)
            return None

    async def set(self, user_id: str, items: list[FileListItem]) -> None:
        key = self.key_for(user_id)
        try:
            await self._cache.set(key, [i.to_cache_value() for i in items], ttl=self._ttl)
        except Exception as exc:
            self._logger.warning("file_list_cache_set_failed", key=key, error=str(exc))

    async def invalidate(self, user_id: str) -> None:
        key = self.key_for(user_id)
        try:
            await self._cache.delete(key)
        except Exception as exc:
            self._logger.warning(
                "file_list_cache_invalidate_failed", key=key, error=str(exc)
            )
            return
        self._logger.debug("file_list_cache_invalidated", key=key)
