"""Batch resolution of weather queries through the shared cache.

A batch goes through three phases, each one a barrier over concurrent tasks:

1. cache lookup for every location,
2. upstream fetch for every location the cache couldn't answer,
3. cache write-back for every successful fetch.

The result always has one outcome per input location, in input order.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import aiodogstatsd

from cumulus.exceptions import CacheEntryError
from cumulus.utils.task_runner import settle
from cumulus.weather.backends.protocol import WeatherSnapshot
from cumulus.weather.fetcher import UpstreamFetcher
from cumulus.weather.gateway import CacheGateway, CacheHit
from cumulus.weather.keys import cache_key_for_location
from cumulus.weather.outcome import Failure, Outcome, Success
from cumulus.weather.validator import validate_batch

logger = logging.getLogger(__name__)

UNRESOLVED_ERROR: str = "Data not found or processing error"


@dataclass(frozen=True)
class PendingFetch:
    """A location the cache couldn't answer, waiting for an upstream fetch."""

    index: int
    location: str
    cache_key: str


class BatchResolver:
    """Resolve batches of locations to weather snapshots, cache first."""

    gateway: CacheGateway
    fetcher: UpstreamFetcher
    metrics_client: aiodogstatsd.Client
    cache_ttl_sec: int

    def __init__(
        self,
        gateway: CacheGateway,
        fetcher: UpstreamFetcher,
        metrics_client: aiodogstatsd.Client,
        cache_ttl_sec: int = 3600,
    ) -> None:
        self.gateway = gateway
        self.fetcher = fetcher
        self.metrics_client = metrics_client
        self.cache_ttl_sec = cache_ttl_sec

    async def resolve_batch(self, candidate: Any) -> list[Outcome]:
        """Validate a candidate batch, then resolve it.

        Raises:
            InvalidBatchError: if the batch is rejected. No cache or upstream call is
            made in that case.
        """
        return await self.resolve(validate_batch(candidate))

    async def resolve(self, locations: list[str]) -> list[Outcome]:
        """Resolve an already validated batch of locations.

        Duplicate locations are resolved independently, each in its own slot.
        """
        with self.metrics_client.timeit("weather.resolve"):
            keys: list[str] = [cache_key_for_location(location) for location in locations]
            slots: list[Outcome | None] = [None] * len(locations)

            pending: list[PendingFetch] = await self._lookup_cache(locations, keys, slots)
            if pending:
                logger.info(f"Fetching data for {len(pending)} locations from upstream")
                await self._fetch_and_store(pending, slots)

            return [
                outcome
                if outcome is not None
                else Failure(location=location, error=UNRESOLVED_ERROR)
                for location, outcome in zip(locations, slots)
            ]

    async def _lookup_cache(
        self, locations: list[str], keys: list[str], slots: list[Outcome | None]
    ) -> list[PendingFetch]:
        """Fill the slots of cache hits and return the locations left to fetch."""
        with self.metrics_client.timeit("weather.cache.fetch"):
            lookups = await settle(
                [
                    asyncio.create_task(self.gateway.get(key), name=f"cache-get-{index}")
                    for index, key in enumerate(keys)
                ]
            )

        pending: list[PendingFetch] = []
        for index, lookup in enumerate(lookups):
            location, key = locations[index], keys[index]
            if isinstance(lookup, CacheHit):
                try:
                    slots[index] = Success(
                        snapshot=WeatherSnapshot.from_cache_value(lookup.data)
                    )
                    logger.debug(f"Cache hit for {location}")
                    continue
                except CacheEntryError as exc:
                    logger.error(f"Error parsing cached data for key {key}: {exc}")
                    self.metrics_client.increment("weather.cache.data.error")
            elif isinstance(lookup, BaseException):
                # The gateway never raises, so this is a programming error. Fetching
                # keeps the location answerable.
                logger.error(f"Cache lookup for key {key} failed: {lookup!r}")
            else:
                logger.debug(f"Cache miss for {location}")
            pending.append(PendingFetch(index=index, location=location, cache_key=key))

        return pending

    async def _fetch_and_store(
        self, pending: list[PendingFetch], slots: list[Outcome | None]
    ) -> None:
        """Fetch the pending locations, fill their slots, and write successes back."""
        with self.metrics_client.timeit("weather.upstream.fetch"):
            outcomes = await settle(
                [
                    asyncio.create_task(
                        self.fetcher.fetch_one(item.location), name=f"fetch-{item.index}"
                    )
                    for item in pending
                ]
            )

        write_backs: list[asyncio.Task] = []
        for item, outcome in zip(pending, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(f"Upstream fetch for {item.location} failed: {outcome!r}")
                outcome = Failure(location=item.location, error=UNRESOLVED_ERROR)
            slots[item.index] = outcome
            if isinstance(outcome, Success):
                write_backs.append(
                    asyncio.create_task(
                        self.gateway.set(
                            item.cache_key,
                            outcome.snapshot.to_cache_value(),
                            self.cache_ttl_sec,
                        ),
                        name=f"cache-set-{item.index}",
                    )
                )
            else:
                self.metrics_client.increment("weather.location.failure")

        # Joined only so no write outlives the request, the outcomes don't matter.
        await settle(write_backs)

    async def shutdown(self) -> None:
        """Close the upstream connections and the cache."""
        await self.fetcher.shutdown()
        await self.gateway.close()
