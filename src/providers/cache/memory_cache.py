"""Process-local cache provider for the per-user file lists.

Backed by ``cachetools.TTLCache``, which bounds the number of entries
(least-recently-used first out) and caps every entry at the provider-wide
TTL.  Each entry also carries its own deadline so a caller may ask for a
shorter lifetime than the default, matching what the Redis backend does
with ``SET ... EX``.

Nothing here is shared between worker processes; deployments running more
than one worker should select ``CACHE_BACKEND=redis``.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

import structlog
from cachetools import TTLCache

from src.interfaces.cache_provider import ICacheProvider

logger = structlog.get_logger(logger_name=__name__)


class MemoryCacheProvider(ICacheProvider):
    """Bounded in-memory cache with per-entry expiry.

    Parameters
    ----------
    max_size:
        Entry count after which the least-recently-used entry is dropped.
    ttl:
        Default and maximum lifetime of an entry, in seconds.
    timer:
        Monotonic clock; injectable so expiry can be tested without sleeping.
    """

    def __init__(
        self,
        max_size: int = 100,
        ttl: int = 86400,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl
        self._timer = timer
        # key -> (deadline, value)
        self._entries: TTLCache[str, tuple[float, Any]] = TTLCache(
            maxsize=max_size, ttl=ttl, timer=timer
        )

    async def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("memory_cache_miss", key=key)
            return None
        deadline, value = entry
        if self._timer() >= deadline:
            self._entries.pop(key, None)
            logger.debug("memory_cache_expired", key=key)
            return None
        logger.debug("memory_cache_hit", key=key)
        return value

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store *value*; *ttl* may shorten, never extend, the default lifetime."""
        lifetime = self._ttl if ttl is None else min(ttl, self._ttl)
        self._entries[key] = (self._timer() + lifetime, value)
        logger.debug("memory_cache_set", key=key, ttl=lifetime)

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)
        logger.debug("memory_cache_delete", key=key)

    async def exists(self, key: str) -> bool:
        return await self.get(key) is not None

    def get_provider_name(self) -> str:
        return "memory"

    def __len__(self) -> int:
        return len(self._entries)
