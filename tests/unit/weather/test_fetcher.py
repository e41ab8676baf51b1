# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Unit tests for the fetcher.py module."""

import asyncio
import logging
from typing import Any

import pytest
from pytest import LogCaptureFixture

from cumulus.weather.backends.errors import (
    LocationNotFoundError,
    NetworkError,
    UpstreamError,
    WeatherErrorMessages,
)
from cumulus.weather.backends.protocol import WeatherSnapshot
from cumulus.weather.fetcher import GENERIC_FETCH_ERROR, UpstreamFetcher
from cumulus.weather.outcome import Failure, Success
from tests.types import FilterCaplogFixture


@pytest.fixture(name="fetcher")
def fixture_fetcher(backend_mock: Any, statsd_mock: Any) -> UpstreamFetcher:
    """Create an UpstreamFetcher over the backend mock."""
    return UpstreamFetcher(backend=backend_mock, metrics_client=statsd_mock, query_timeout_sec=0.2)


@pytest.mark.asyncio
async def test_fetch_one_success(
    fetcher: UpstreamFetcher, backend_mock: Any, weather_snapshot: WeatherSnapshot
) -> None:
    """Test that a snapshot from the backend is returned as a Success."""
    backend_mock.get_snapshot.return_value = weather_snapshot

    outcome = await fetcher.fetch_one("London")

    assert outcome == Success(snapshot=weather_snapshot)
    backend_mock.get_snapshot.assert_awaited_once_with("London")


@pytest.mark.parametrize(
    ["error", "expected_message"],
    [
        (LocationNotFoundError("Atlantis"), "Location not found or invalid: Atlantis"),
        (
            UpstreamError(
                WeatherErrorMessages.HTTP_UNEXPECTED_STATUS, location="Atlantis", status_code=500
            ),
            "API error for Atlantis: Status 500",
        ),
        (
            UpstreamError(WeatherErrorMessages.NO_CURRENT_CONDITIONS, location="Atlantis"),
            "No current weather conditions found for Atlantis",
        ),
        (
            NetworkError("Atlantis"),
            "Failed to fetch weather data for Atlantis from external API",
        ),
    ],
    ids=["not-found", "bad-status", "bad-payload", "network"],
)
@pytest.mark.asyncio
async def test_fetch_one_backend_error(
    fetcher: UpstreamFetcher,
    backend_mock: Any,
    statsd_mock: Any,
    error: Exception,
    expected_message: str,
) -> None:
    """Test that every backend error collapses to a Failure with its message."""
    backend_mock.get_snapshot.side_effect = error

    outcome = await fetcher.fetch_one("Atlantis")

    assert outcome == Failure(location="Atlantis", error=expected_message)
    statsd_mock.increment.assert_called_once_with("weather.upstream.failure")


@pytest.mark.asyncio
async def test_fetch_one_timeout(
    fetcher: UpstreamFetcher, backend_mock: Any, statsd_mock: Any
) -> None:
    """Test that a slow backend produces a network Failure once the timeout expires."""

    async def slow_get_snapshot(location: str) -> WeatherSnapshot:
        await asyncio.sleep(1)
        raise AssertionError("unreachable")

    backend_mock.get_snapshot.side_effect = slow_get_snapshot

    outcome = await fetcher.fetch_one("London")

    assert outcome == Failure(
        location="London", error="Failed to fetch weather data for London from external API"
    )
    statsd_mock.increment.assert_called_once_with("weather.upstream.timeout")


@pytest.mark.asyncio
async def test_fetch_one_unexpected_error(
    fetcher: UpstreamFetcher,
    backend_mock: Any,
    caplog: LogCaptureFixture,
    filter_caplog: FilterCaplogFixture,
) -> None:
    """Test that an unexpected exception is contained to the location and logged."""
    caplog.set_level(logging.ERROR)
    backend_mock.get_snapshot.side_effect = KeyError("temp")

    outcome = await fetcher.fetch_one("London")

    assert outcome == Failure(location="London", error=GENERIC_FETCH_ERROR)
    records = filter_caplog(caplog.records, "cumulus.weather.fetcher")
    assert len(records) == 1
    assert records[0].exc_info is not None


@pytest.mark.asyncio
async def test_fetch_one_without_timeout(
    backend_mock: Any, statsd_mock: Any, weather_snapshot: WeatherSnapshot
) -> None:
    """Test that a timeout of 0 disables the per-fetch timeout."""
    fetcher = UpstreamFetcher(
        backend=backend_mock, metrics_client=statsd_mock, query_timeout_sec=0
    )
    backend_mock.get_snapshot.return_value = weather_snapshot

    assert fetcher.query_timeout_sec is None
    assert await fetcher.fetch_one("London") == Success(snapshot=weather_snapshot)


@pytest.mark.asyncio
async def test_shutdown(fetcher: UpstreamFetcher, backend_mock: Any) -> None:
    """Test that shutting down the fetcher shuts down the backend."""
    await fetcher.shutdown()

    backend_mock.shutdown.assert_awaited_once()
