"""Unit tests for MemoryCacheProvider and RedisCacheProvider."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.cache.redis_cache import RedisCacheProvider


# ======================================================================
# MemoryCacheProvider
# ======================================================================


class TestMemoryCacheProvider:
    @pytest.fixture()
    def cache(self) -> MemoryCacheProvider:
        return MemoryCacheProvider(max_size=100, ttl=3600)

    @pytest.mark.asyncio
    async def test_get_missing_key_returns_none(self, cache: MemoryCacheProvider) -> None:
        assert await cache.get("nonexistent") is None

    @pytest.mark.asyncio
    async def test_set_and_get(self, cache: MemoryCacheProvider) -> None:
        await cache.set("files:u1:list", [{"id": "a"}])
        assert await cache.get("files:u1:list") == [{"id": "a"}]

    @pytest.mark.asyncio
    async def test_set_overwrites_existing(self, cache: MemoryCacheProvider) -> None:
        await cache.set("key1", "old")
        await cache.set("key1", "new")
        assert await cache.get("key1") == "new"

    @pytest.mark.asyncio
    async def test_delete_removes_key(self, cache: MemoryCacheProvider) -> None:
        await cache.set("key1", "value1")
        await cache.delete("key1")
        assert await cache.get("key1") is None

    @pytest.mark.asyncio
    async def test_delete_nonexistent_is_noop(self, cache: MemoryCacheProvider) -> None:
        await cache.delete("nonexistent")

    @pytest.mark.asyncio
    async def test_exists(self, cache: MemoryCacheProvider) -> None:
        await cache.set("key1", "value1")
        assert await cache.exists("key1") is True
        assert await cache.exists("missing") is False

    @pytest.mark.asyncio
    async def test_capacity_bounded(self) -> None:
        cache = MemoryCacheProvider(max_size=3, ttl=3600)
        for i in range(10):
            await cache.set(f"k{i}", i)
        assert len(cache) == 3
        assert await cache.get("k9") == 9
        assert await cache.get("k0") is None

    @pytest.mark.asyncio
    async def test_least_recently_used_evicted_first(self) -> None:
        cache = MemoryCacheProvider(max_size=2, ttl=3600)
        await cache.set("a", 1)
        await cache.set("b", 2)
        await cache.get("a")
        await cache.set("c", 3)
        assert await cache.exists("a") is True
        assert await cache.exists("b") is False

    @pytest.mark.asyncio
    async def test_per_entry_ttl(self) -> None:
        now = [1000.0]
        cache = MemoryCacheProvider(max_size=10, ttl=3600, timer=lambda: now[0])
        await cache.set("short", "v", ttl=5)
        await cache.set("long", "v")

        now[0] += 10
        assert await cache.get("short") is None
        assert await cache.get("long") == "v"

        now[0] += 3600
        assert await cache.get("long") is None

    @pytest.mark.asyncio
    async def test_ttl_cannot_exceed_default(self) -> None:
        now = [0.0]
        cache = MemoryCacheProvider(max_size=10, ttl=60, timer=lambda: now[0])
        await cache.set("k", "v", ttl=10_000)
        now[0] += 61
        assert await cache.exists("k") is False

    @pytest.mark.asyncio
    async def test_empty_list_is_a_hit(self, cache: MemoryCacheProvider) -> None:
        await cache.set("files:u1:list", [])
        assert await cache.get("files:u1:list") == []
        assert await cache.exists("files:u1:list") is True

    def test_provider_name(self, cache: MemoryCacheProvider) -> None:
        assert cache.get_provider_name() == "memory"


# ======================================================================
# RedisCacheProvider
# ======================================================================


class TestRedisCacheProvider:
    @pytest.fixture()
    def client(self) -> MagicMock:
        client = MagicMock()
        client.get = AsyncMock(return_value=None)
        client.set = AsyncMock(return_value=True)
        client.delete = AsyncMock(return_value=1)
        client.exists = AsyncMock(return_value=0)
        client.aclose = AsyncMock()
        return client

    @pytest.mark.asyncio
    async def test_get_miss(self, client: MagicMock) -> None:
        cache = RedisCacheProvider(client)
        assert await cache.get("k") is None
        client.get.assert_awaited_once_with("k")

    @pytest.mark.asyncio
    async def test_get_decodes_json(self, client: MagicMock) -> None:
        client.get.return_value = json.dumps([{"id": "a"}])
        cache = RedisCacheProvider(client)
        assert await cache.get("k") == [{"id": "a"}]

    @pytest.mark.asyncio
    async def test_set_uses_default_ttl(self, client: MagicMock) -> None:
        cache = RedisCacheProvider(client, ttl=86400)
        await cache.set("k", {"a": 1})
        client.set.assert_awaited_once_with("k", json.dumps({"a": 1}), ex=86400)

    @pytest.mark.asyncio
    async def test_set_honours_explicit_ttl(self, client: MagicMock) -> None:
        cache = RedisCacheProvider(client, ttl=86400)
        await cache.set("k", [], ttl=60)
        assert client.set.await_args.kwargs["ex"] == 60

    @pytest.mark.asyncio
    async def test_delete_and_exists(self, client: MagicMock) -> None:
        client.exists.return_value = 1
        cache = RedisCacheProvider(client)
        await cache.delete("k")
        client.delete.assert_awaited_once_with("k")
        assert await cache.exists("k") is True

    @pytest.mark.asyncio
    async def test_errors_propagate(self, client: MagicMock) -> None:
        client.get.side_effect = ConnectionError("redis down")
        cache = RedisCacheProvider(client)
        with pytest.raises(ConnectionError):
            await cache.get("k")

    @pytest.mark.asyncio
    async def test_close(self, client: MagicMock) -> None:
        await RedisCacheProvider(client).close()
        client.aclose.assert_awaited_once()
