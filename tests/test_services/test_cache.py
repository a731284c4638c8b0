"""Tests for the Redis-backed cache."""

from unittest.mock import AsyncMock

from now_playing.services.cache import RedisCache


async def test_get_applies_prefix() -> None:
    redis = AsyncMock()
    redis.get.return_value = '{"a": 1}'
    cache = RedisCache(redis, key_prefix="np:")

    assert await cache.get("search:he_IL:abc") == '{"a": 1}'
    redis.get.assert_awaited_once_with("np:search:he_IL:abc")


async def test_get_miss_returns_none() -> None:
    redis = AsyncMock()
    redis.get.return_value = None

    assert await RedisCache(redis).get("missing") is None


async def test_set_uses_expiry() -> None:
    redis = AsyncMock()
    cache = RedisCache(redis)

    await cache.set("bestRatedPosters:any", "[]", ttl_seconds=86400)

    redis.set.assert_awaited_once_with("bestRatedPosters:any", "[]", ex=86400)


async def test_close() -> None:
    redis = AsyncMock()

    await RedisCache(redis).close()

    redis.aclose.assert_awaited_once()


def test_from_url_decodes_responses() -> None:
    cache = RedisCache.from_url("redis://localhost:6379/3", key_prefix="np:")

    assert cache._client.connection_pool.connection_kwargs["decode_responses"] is True
    assert cache._client.connection_pool.connection_kwargs["db"] == 3
    assert cache._key_prefix == "np:"
