"""
Тесты менеджера кэша (Redis подменен моком)
"""
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError, ResponseError

from core.cache import CacheManager


@pytest.fixture
def cache() -> CacheManager:
    manager = CacheManager("redis://localhost:6379/0", ttl_seconds=3600, key_prefix="saju")
    manager.redis = AsyncMock()
    return manager


class TestCacheManager:

    @pytest.mark.asyncio
    async def test_set_uses_prefix_and_ttl(self, cache):
        assert await cache.set("pending_save:abc", {"recordId": "1"}) is True
        cache.redis.set.assert_awaited_once_with(
            "saju:pending_save:abc", json.dumps({"recordId": "1"}), ex=3600
        )

    @pytest.mark.asyncio
    async def test_set_custom_ttl(self, cache):
        await cache.set("k", [1, 2], ttl_seconds=60)
        assert cache.redis.set.await_args.kwargs["ex"] == 60

    @pytest.mark.asyncio
    async def test_pop_miss_and_garbage(self, cache):
        cache.redis.getdel.return_value = None
        assert await cache.pop("k") is None
        cache.redis.getdel.return_value = "not json"
        assert await cache.pop("k") is None

    @pytest.mark.asyncio
    async def test_pop_is_getdel(self, cache):
        cache.redis.getdel.return_value = '{"recordId": "7"}'
        assert await cache.pop("pending_save:abc") == {"recordId": "7"}
        cache.redis.getdel.assert_awaited_once_with("saju:pending_save:abc")
        cache.redis.get.assert_not_awaited()

    def test_reads_only_through_pop(self):
        assert not hasattr(CacheManager, "get")

    @pytest.mark.asyncio
    async def test_connection_error_drops_client(self, cache):
        cache.redis.set.side_effect = RedisConnectionError("down")
        assert await cache.set("k", 1) is False
        assert cache.redis is None

    @pytest.mark.asyncio
    async def test_other_redis_error_keeps_client(self, cache):
        cache.redis.getdel.side_effect = ResponseError("WRONGTYPE")
        assert await cache.pop("k") is None
        assert cache.redis is not None

    @pytest.mark.asyncio
    async def test_reconnect_failure(self):
        manager = CacheManager("redis://localhost:1/0")
        client = AsyncMock()
        client.ping.side_effect = RedisConnectionError("refused")
        with patch("core.cache.aioredis.from_url", MagicMock(return_value=client)):
            assert await manager.pop("k") is None
            assert await manager.set("k", 1) is False
            await manager.delete("k")
        assert manager.redis is None
        client.getdel.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_close(self, cache):
        client = cache.redis
        await cache.close()
        client.aclose.assert_awaited_once()
        assert cache.redis is None
