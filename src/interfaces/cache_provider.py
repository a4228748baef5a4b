"""Cache contract for the per-user file list snapshot.

The only consumer is :class:`src.services.file_list_cache.FileListCache`,
which stores each user's list items under ``files:{user_id}:list``.  Values
are JSON-compatible (lists of dicts) so a network store can hold them as-is.
Implementations raise on backend faults; ``FileListCache`` decides that a
fault is a miss.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


# Concrete implementations: MemoryCacheProvider, RedisCacheProvider
# Located in: src/providers/cache/
class ICacheProvider(ABC):
    """Async key-value store with expiry."""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the live value under *key*, or ``None`` when absent or expired."""

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store *value* under *key* for *ttl* seconds (backend default when ``None``)."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Drop *key*; deleting a missing key is not an error."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Return whether *key* currently holds a live value."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the backend label reported by ``/health`` (``"memory"``, ``"redis"``)."""
