# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Module for test configurations for the API integration tests."""

from datetime import timedelta
from typing import Any, Iterator

import pytest
from fastapi.testclient import TestClient
from pytest_mock import MockerFixture

from cumulus.cache.protocol import CacheAdapter
from cumulus.config import settings
from cumulus.main import app
from cumulus.weather import get_resolver
from cumulus.weather.backends.errors import LocationNotFoundError
from cumulus.weather.backends.protocol import WeatherBackend, WeatherSnapshot
from cumulus.weather.fetcher import UpstreamFetcher
from cumulus.weather.gateway import CacheGateway
from cumulus.weather.resolver import BatchResolver

UNKNOWN_LOCATION = "Atlantis"


def make_snapshot(location: str) -> WeatherSnapshot:
    """Return the snapshot the backend mock reports for a location."""
    return WeatherSnapshot(
        location=location,
        temperature="12.0°C",
        description="Overcast",
        humidity="81.0%",
        wind_speed="14.8 km/h",
        source="Visual Crossing API",
    )


@pytest.fixture(name="cache_store")
def fixture_cache_store() -> dict[str, bytes]:
    """Return the dictionary backing the cache mock."""
    return {}


@pytest.fixture(name="backend_mock")
def fixture_backend_mock(mocker: MockerFixture) -> Any:
    """Create a WeatherBackend mock that knows every location but `UNKNOWN_LOCATION`."""

    async def mock_get_snapshot(location: str) -> WeatherSnapshot:
        if location == UNKNOWN_LOCATION:
            raise LocationNotFoundError(location)
        return make_snapshot(location)

    backend_mock = mocker.AsyncMock(spec=WeatherBackend)
    backend_mock.get_snapshot.side_effect = mock_get_snapshot
    return backend_mock


@pytest.fixture(name="resolver")
def fixture_resolver(
    mocker: MockerFixture, cache_store: dict[str, bytes], backend_mock: Any, statsd_mock: Any
) -> BatchResolver:
    """Create a batch resolver over an in-memory cache and the backend mock."""

    async def mock_get(key: str) -> bytes | None:
        return cache_store.get(key)

    async def mock_set(key: str, value: bytes, ttl: timedelta | None = None) -> None:
        cache_store[key] = value

    cache_mock = mocker.AsyncMock(spec=CacheAdapter)
    cache_mock.get.side_effect = mock_get
    cache_mock.set.side_effect = mock_set

    return BatchResolver(
        gateway=CacheGateway(cache=cache_mock, metrics_client=statsd_mock),
        fetcher=UpstreamFetcher(
            backend=backend_mock, metrics_client=statsd_mock, query_timeout_sec=0.5
        ),
        metrics_client=statsd_mock,
        cache_ttl_sec=3600,
    )


@pytest.fixture(name="inject_resolver", autouse=True)
def fixture_inject_resolver(resolver: BatchResolver) -> Iterator[None]:
    """Inject the batch resolver into the app for testing."""
    app.dependency_overrides[get_resolver] = lambda: resolver
    yield
    app.dependency_overrides.pop(get_resolver, None)


@pytest.fixture(name="api_key")
def fixture_api_key() -> Iterator[str]:
    """Require an API key on the v1 API for the duration of a test."""
    old_api_key = settings.web.api_key
    settings.web.api_key = "test-api-key"
    yield settings.web.api_key
    settings.web.api_key = old_api_key


@pytest.fixture(name="client")
def fixture_test_client() -> TestClient:
    """Return a FastAPI TestClient instance.

    Note that this will NOT trigger event handlers (i.e. `startup` and `shutdown`) for
    the app, see: https://fastapi.tiangolo.com/advanced/testing-events/
    """
    return TestClient(app)


@pytest.fixture(name="client_with_events")
def fixture_test_client_with_events() -> Iterator[TestClient]:
    """Return a FastAPI TestClient instance that runs the app lifespan."""
    with TestClient(app) as client:
        yield client
