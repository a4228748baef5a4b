"""Unit tests for the per-user file list cache."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.interfaces.cache_provider import ICacheProvider
from src.models.files import FileListItem
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.services.file_list_cache import FileListCache, build_cache_key


def _item(item_id: str = "f-1") -> FileListItem:
    return FileListItem(
        id=item_id,
        filename="book.pdf",
        summary="s",
        audio_url="https://cdn/x.mp3",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def _failing_cache() -> MagicMock:
    cache = MagicMock(spec=ICacheProvider)
    cache.get = AsyncMock(side_effect=ConnectionError("cache down"))
    cache.set = AsyncMock(side_effect=ConnectionError("cache down"))
    cache.delete = AsyncMock(side_effect=ConnectionError("cache down"))
    return cache


class TestBuildCacheKey:
    def test_joins_with_colon(self) -> None:
        assert build_cache_key("files", "user-1", "list") == "files:user-1:list"

    def test_deterministic(self) -> None:
        assert build_cache_key("files", "u", "list") == build_cache_key("files", "u", "list")

    def test_differs_per_user(self) -> None:
        assert build_cache_key("files", "u1", "list") != build_cache_key("files", "u2", "list")

    def test_key_for_user(self) -> None:
        assert FileListCache.key_for("abc") == "files:abc:list"


class TestFileListCache:
    @pytest.mark.asyncio
    async def test_miss_returns_none(self) -> None:
        assert await FileListCache(MemoryCacheProvider()).get("u1") is None

    @pytest.mark.asyncio
    async def test_round_trip(self) -> None:
        cache = FileListCache(MemoryCacheProvider())
        await cache.set("u1", [_item("a"), _item("b")])
        items = await cache.get("u1")
        assert [i.id for i in items] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_empty_list_is_a_hit(self) -> None:
        cache = FileListCache(MemoryCacheProvider())
        await cache.set("u1", [])
        assert await cache.get("u1") == []

    @pytest.mark.asyncio
    async def test_invalidate_forces_miss(self) -> None:
        cache = FileListCache(MemoryCacheProvider())
        await cache.set("u1", [_item()])
        await cache.invalidate("u1")
        assert await cache.get("u1") is None

    @pytest.mark.asyncio
    async def test_invalidate_only_touches_one_user(self) -> None:
        cache = FileListCache(MemoryCacheProvider())
        await cache.set("u1", [_item()])
        await cache.set("u2", [_item()])
        await cache.invalidate("u1")
        assert await cache.get("u2") is not None

    @pytest.mark.asyncio
    async def test_set_passes_ttl(self) -> None:
        provider = MagicMock(spec=ICacheProvider)
        provider.set = AsyncMock()
        await FileListCache(provider, ttl=123).set("u1", [_item()])
        key, value = provider.set.await_args.args
        assert key == "files:u1:list"
        assert value[0]["id"] == "f-1"
        assert provider.set.await_args.kwargs["ttl"] == 123

    @pytest.mark.asyncio
    async def test_provider_faults_degrade_to_miss(self) -> None:
        cache = FileListCache(_failing_cache())
        assert await cache.get("u1") is None
        await cache.set("u1", [_item()])
        await cache.invalidate("u1")

    @pytest.mark.asyncio
    async def test_corrupt_entry_is_dropped(self) -> None:
        provider = MemoryCacheProvider()
        await provider.set("files:u1:list", [{"unexpected": True}])
        cache = FileListCache(provider)
        assert await cache.get("u1") is None
        assert await provider.exists("files:u1:list") is False
