# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Module for test configurations for the weather unit tests."""

from datetime import timedelta
from typing import Any

import pytest
from pytest_mock import MockerFixture

from cumulus.cache.protocol import CacheAdapter
from cumulus.weather.backends.protocol import WeatherBackend, WeatherSnapshot


def make_snapshot(location: str) -> WeatherSnapshot:
    """Return a snapshot labelled with the given location."""
    return WeatherSnapshot(
        location=location,
        temperature="15.5°C",
        description="Partially cloudy",
        humidity="72.1%",
        wind_speed="11.2 km/h",
        source="Visual Crossing API",
    )


@pytest.fixture(name="weather_snapshot")
def fixture_weather_snapshot() -> WeatherSnapshot:
    """Return a weather snapshot for London."""
    return make_snapshot("London, England, United Kingdom")


@pytest.fixture(name="cache_store")
def fixture_cache_store() -> dict[str, bytes]:
    """Return the dictionary backing `cache_mock`."""
    return {}


@pytest.fixture(name="cache_mock")
def fixture_cache_mock(mocker: MockerFixture, cache_store: dict[str, bytes]) -> Any:
    """Create a cache adapter mock object that stores values in `cache_store`."""

    async def mock_get(key: str) -> bytes | None:
        return cache_store.get(key)

    async def mock_set(key: str, value: bytes, ttl: timedelta | None = None) -> None:
        cache_store[key] = value

    mock = mocker.AsyncMock(spec=CacheAdapter)
    mock.get.side_effect = mock_get
    mock.set.side_effect = mock_set
    return mock


@pytest.fixture(name="backend_mock")
def fixture_backend_mock(mocker: MockerFixture) -> Any:
    """Create a WeatherBackend mock object for test."""
    return mocker.AsyncMock(spec=WeatherBackend)
