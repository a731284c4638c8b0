"""Key-value cache used in front of expensive catalog reads."""

from typing import Protocol

from fastapi import Request
from redis.asyncio import Redis


class Cache(Protocol):
    """Minimal TTL cache contract. Values are JSON text."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str, ttl_seconds: int) -> None: ...


class RedisCache:
    """``Cache`` backed by Redis.

    No transaction spans get/compute/set: concurrent misses may recompute
    the same value, and the last write wins.
    """

    def __init__(self, client: Redis, key_prefix: str = "") -> None:
        self._client = client
        self._key_prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, key_prefix: str = "") -> "RedisCache":
        """Create a cache from a ``redis://`` URL."""
        return cls(Redis.from_url(url, decode_responses=True), key_prefix=key_prefix)

    def _key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    async def get(self, key: str) -> str | None:
        return await self._client.get(self._key(key))

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        await self._client.set(self._key(key), value, ex=ttl_seconds)

    async def close(self) -> None:
        await self._client.aclose()


def get_cache(request: Request) -> Cache:
    """Return the application-wide cache opened by the lifespan hook.

    Can be used as a FastAPI dependency.
    """
    return request.app.state.cache
