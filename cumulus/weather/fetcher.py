"""Upstream fetcher that turns one backend lookup into a per-location outcome."""

import asyncio
import logging

import aiodogstatsd

from cumulus.exceptions import BackendError
from cumulus.weather.backends.errors import NetworkError
from cumulus.weather.backends.protocol import WeatherBackend
from cumulus.weather.outcome import Failure, Outcome, Success

logger = logging.getLogger(__name__)

GENERIC_FETCH_ERROR: str = "Failed to fetch weather data"


class UpstreamFetcher:
    """Resolve a single location against the weather backend.

    Every error is contained to the location that caused it: `fetch_one` never raises
    for a backend failure, it returns a `Failure` carrying the message for the caller.
    """

    backend: WeatherBackend
    metrics_client: aiodogstatsd.Client
    query_timeout_sec: float | None

    def __init__(
        self,
        backend: WeatherBackend,
        metrics_client: aiodogstatsd.Client,
        query_timeout_sec: float | None = None,
    ) -> None:
        self.backend = backend
        self.metrics_client = metrics_client
        self.query_timeout_sec = query_timeout_sec or None

    async def fetch_one(self, location: str) -> Outcome:
        """Fetch the weather for a raw (non-normalized) location, making one attempt."""
        try:
            async with asyncio.timeout(self.query_timeout_sec):
                snapshot = await self.backend.get_snapshot(location)
        except TimeoutError:
            logger.warning(f"Timed out fetching weather data for {location}")
            self.metrics_client.increment("weather.upstream.timeout")
            return Failure(location=location, error=str(NetworkError(location)))
        except BackendError as backend_error:
            logger.warning(backend_error)
            self.metrics_client.increment("weather.upstream.failure")
            return Failure(location=location, error=str(backend_error))
        except Exception:
            logger.exception(f"Unexpected error fetching weather data for {location}")
            self.metrics_client.increment("weather.upstream.failure")
            return Failure(location=location, error=GENERIC_FETCH_ERROR)

        return Success(snapshot=snapshot)

    async def shutdown(self) -> None:
        """Shut down the backend."""
        await self.backend.shutdown()
