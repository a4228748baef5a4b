"""Cache providers.

TTL-bounded cache that fronts the per-user file list so repeated
``GET /files`` calls skip the record store.

MemoryCacheProvider is a dict-based cache, fast but not shared across
processes.  For multi-worker deployments set ``CACHE_BACKEND=redis`` to use
RedisCacheProvider instead; no business logic changes.
"""

from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.cache.redis_cache import RedisCacheProvider

__all__ = ["MemoryCacheProvider", "RedisCacheProvider"]
