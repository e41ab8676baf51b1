"""A wrapper for Visual Crossing Timeline API interactions."""

import logging
from typing import Any
from urllib.parse import quote

import aiodogstatsd
from httpx import AsyncClient, HTTPError, Response
from pydantic import ValidationError

from cumulus.weather.backends.errors import (
    LocationNotFoundError,
    NetworkError,
    UpstreamError,
    WeatherErrorMessages,
)
from cumulus.weather.backends.protocol import WeatherSnapshot

logger = logging.getLogger(__name__)

SOURCE_TAG: str = "Visual Crossing API"

# Statuses the provider uses for a location it can't geocode.
NOT_FOUND_STATUSES: frozenset[int] = frozenset({400, 404})


class VisualCrossingBackend:
    """Backend that connects to the Visual Crossing Timeline API.

    The Timeline API accepts a free-text location (city name, address or zip code)
    directly in the request path, so one request resolves one location.
    """

    api_key: str
    http_client: AsyncClient
    metrics_client: aiodogstatsd.Client
    url_timeline_path: str
    unit_group: str

    def __init__(
        self,
        api_key: str,
        http_client: AsyncClient,
        metrics_client: aiodogstatsd.Client,
        url_timeline_path: str,
        unit_group: str = "metric",
    ) -> None:
        """Initialize the Visual Crossing backend.

        Raises:
            ValueError: If API key or URL parameters are None or empty.
        """
        if not api_key:
            raise ValueError("Visual Crossing API key not specified")

        if not url_timeline_path or "{location}" not in url_timeline_path:
            raise ValueError("Visual Crossing timeline path is undefined")

        self.api_key = api_key
        self.http_client = http_client
        self.metrics_client = metrics_client
        self.url_timeline_path = url_timeline_path
        self.unit_group = unit_group

    async def get_snapshot(self, location: str) -> WeatherSnapshot:
        """Get the current conditions for a location with a single upstream call.

        Raises:
            LocationNotFoundError: The provider answered 400 or 404.
            UpstreamError: Any other error status, or a payload without usable current
                conditions.
            NetworkError: The request could not be completed.
        Reference:
            https://www.visualcrossing.com/resources/documentation/weather-api/timeline-weather-api/
        """
        logger.debug(f"Fetching weather data for {location} from Visual Crossing")
        params: dict[str, str] = {
            "unitGroup": self.unit_group,
            "key": self.api_key,
            "contentType": "json",
        }

        try:
            with self.metrics_client.timeit("visualcrossing.request.timeline.get"):
                response: Response = await self.http_client.get(
                    self.url_timeline_path.format(location=quote(location, safe="")),
                    params=params,
                )
        except HTTPError as exc:
            logger.warning(f"Error calling weather API for {location}: {exc.__class__.__name__}")
            self.metrics_client.increment("visualcrossing.request.network.error")
            raise NetworkError(location) from exc

        if response.is_error:
            # The provider reports bad input as a plain-text body, keep a snippet for triage.
            logger.warning(
                f"Error calling weather API for {location}: "
                f"HTTP {response.status_code} {response.text[:200]}"
            )
            self.metrics_client.increment(
                f"visualcrossing.request.status_code.{response.status_code}"
            )
            if response.status_code in NOT_FOUND_STATUSES:
                raise LocationNotFoundError(location)
            raise UpstreamError(
                WeatherErrorMessages.HTTP_UNEXPECTED_STATUS,
                location=location,
                status_code=response.status_code,
            )

        try:
            payload: Any = response.json()
        except ValueError as exc:
            self.metrics_client.increment("visualcrossing.request.processor.error")
            raise UpstreamError(
                WeatherErrorMessages.NO_CURRENT_CONDITIONS, location=location
            ) from exc

        try:
            snapshot = process_timeline_response(payload, location)
        except ValidationError as exc:
            logger.warning(
                f"Unexpected current conditions for {location}: {exc.error_count()} errors"
            )
            snapshot = None

        if snapshot is None:
            self.metrics_client.increment("visualcrossing.request.processor.error")
            raise UpstreamError(WeatherErrorMessages.NO_CURRENT_CONDITIONS, location=location)

        return snapshot

    async def shutdown(self) -> None:
        """Close out the HTTP client during shutdown."""
        await self.http_client.aclose()


def process_timeline_response(response: Any, location: str) -> WeatherSnapshot | None:
    """Process the Timeline API response into a snapshot. Returns `None` when the
    payload lacks the current conditions or reports any of them as `null`.

    Raises:
        ValidationError: if a current condition has an unexpected type.
    """
    match response:
        case {
            "currentConditions": {
                "temp": temp,
                "conditions": conditions,
                "humidity": humidity,
                "windspeed": windspeed,
            }
        } if None not in (temp, conditions, humidity, windspeed):
            # `type: ignore` is necessary because mypy gets confused when
            # matching structures of type `Any` and reports the following
            # line as unreachable. See
            # https://github.com/python/mypy/issues/12770
            return WeatherSnapshot(  # type: ignore
                location=response.get("resolvedAddress") or location,
                temperature=f"{temp}°C",
                description=conditions,
                humidity=f"{humidity}%",
                wind_speed=f"{windspeed} km/h",
                source=SOURCE_TAG,
            )
        case _:
            return None
