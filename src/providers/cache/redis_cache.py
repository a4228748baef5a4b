"""Redis-backed cache provider.

Shares the file-list cache across worker processes.  Values are stored as
JSON strings with a per-key expiry (``SET key value EX ttl``).  Connection
and protocol errors propagate as :class:`redis.RedisError`; callers that
treat the cache as an optimisation (see
:class:`src.services.file_list_cache.FileListCache`) downgrade them to a
miss.
"""

from __future__ import annotations

import json
from typing import Any

import redis.asyncio as redis
import structlog

from src.interfaces.cache_provider import ICacheProvider

logger = structlog.get_logger(logger_name=__name__)


class RedisCacheProvider(ICacheProvider):
    """Cache provider storing JSON values in Redis."""

    def __init__(self, client: redis.Redis, ttl: int = 86400) -> None:
        self._redis = client
        self._default_ttl = ttl

    @classmethod
    def from_url(cls, url: str, ttl: int = 86400) -> RedisCacheProvider:
        """Build a provider with a client created from a ``redis://`` URL."""
        return cls(redis.from_url(url, decode_responses=True), ttl=ttl)

    async def get(self, key: str) -> Any | None:
        raw = await self._redis.get(key)
        if raw is None:
            logger.debug("cache_miss", key=key)
            return None
        logger.debug("cache_hit", key=key)
        return json.loads(raw)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        if ttl is None:
            ttl = self._default_ttl
        await self._redis.set(key, json.dumps(value), ex=ttl)
        logger.debug("cache_set", key=key, ttl=ttl)

    async def delete(self, key: str) -> None:
        await self._redis.delete(key)
        logger.debug("cache_delete", key=key)

    async def exists(self, key: str) -> bool:
        return bool(await self._redis.exists(key))

    async def close(self) -> None:
        """Release the underlying connection pool."""
        await self._redis.aclose()

    def get_provider_name(self) -> str:
        return "redis"
