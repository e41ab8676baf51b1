"""Cache gateway for weather snapshots.

The gateway sits between the resolver and a `CacheAdapter` and guarantees that a
cache outage only ever degrades a lookup into a miss: no cache error escapes it.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import TypeAlias

import aiodogstatsd

from cumulus.cache.protocol import CacheAdapter
from cumulus.exceptions import CacheAdapterError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheHit:
    """The key was found in the cache."""

    data: bytes


@dataclass(frozen=True)
class CacheMiss:
    """The key isn't in the cache."""


@dataclass(frozen=True)
class CacheError:
    """The cache could not be consulted. Callers treat this exactly like a miss."""

    reason: str


CacheLookup: TypeAlias = CacheHit | CacheMiss | CacheError


class CacheGateway:
    """Async get/set over normalized weather cache keys."""

    cache: CacheAdapter
    metrics_client: aiodogstatsd.Client

    def __init__(self, cache: CacheAdapter, metrics_client: aiodogstatsd.Client) -> None:
        self.cache = cache
        self.metrics_client = metrics_client

    async def get(self, key: str) -> CacheLookup:
        """Look up a key. Cache errors are logged and reported as `CacheError`."""
        try:
            data: bytes | None = await self.cache.get(key)
        except CacheAdapterError as exc:
            logger.error(f"Failed to fetch weather snapshot from the cache: {exc}")
            self.metrics_client.increment("cache.get.error")
            return CacheError(reason=str(exc))

        if data is None:
            self.metrics_client.increment("cache.get.miss")
            return CacheMiss()

        self.metrics_client.increment("cache.get.hit")
        return CacheHit(data=data)

    async def set(self, key: str, data: bytes, ttl_sec: int) -> bool:
        """Store a value for `ttl_sec` seconds, overwriting any previous value.

        Returns `True` once the cache acknowledged the write and `False` if it failed.
        A TTL of 0 stores the value without expiry.
        """
        try:
            await self.cache.set(key, data, ttl=timedelta(seconds=ttl_sec) if ttl_sec else None)
        except CacheAdapterError as exc:
            logger.error(f"Failed to store weather snapshot in the cache: {exc}")
            self.metrics_client.increment("cache.set.error")
            return False

        return True

    async def close(self) -> None:
        """Release the underlying cache adapter."""
        await self.cache.close()
