"""Cumulus weather resolver manager."""

from enum import Enum, unique

from dynaconf.base import LazySettings

from cumulus.cache.none import NoCacheAdapter
from cumulus.cache.protocol import CacheAdapter
from cumulus.cache.redis import RedisAdapter, create_redis_client
from cumulus.metrics import get_metrics_client
from cumulus.utils.http_client import create_http_client
from cumulus.weather.backends.fake_backends import FakeWeatherBackend
from cumulus.weather.backends.protocol import WeatherBackend
from cumulus.weather.backends.visualcrossing import VisualCrossingBackend
from cumulus.weather.fetcher import UpstreamFetcher
from cumulus.weather.gateway import CacheGateway
from cumulus.weather.resolver import BatchResolver


@unique
class BackendType(str, Enum):
    """Enum for weather backend type."""

    VISUALCROSSING = "visualcrossing"
    TEST = "test"


@unique
class CacheType(str, Enum):
    """Enum for cache type."""

    REDIS = "redis"
    NONE = "none"


def _create_cache(setting: LazySettings) -> CacheAdapter:
    match setting.weather.cache:
        case CacheType.REDIS:
            return RedisAdapter(
                create_redis_client(
                    server=setting.redis.server,
                    max_connections=setting.redis.max_connections,
                    socket_connect_timeout=setting.redis.socket_connect_timeout_sec,
                    socket_timeout=setting.redis.socket_timeout_sec,
                )
            )
        case _:
            return NoCacheAdapter()


def _create_backend(setting: LazySettings) -> WeatherBackend:
    match setting.weather.backend:
        case BackendType.VISUALCROSSING:
            vc = setting.visualcrossing
            return VisualCrossingBackend(
                api_key=vc.api_key,
                http_client=create_http_client(
                    base_url=vc.url_base,
                    max_connections=vc.max_connections,
                    connect_timeout=vc.connect_timeout_sec,
                    request_timeout=vc.request_timeout_sec,
                ),
                metrics_client=get_metrics_client(),
                url_timeline_path=vc.url_timeline_path,
                unit_group=vc.unit_group,
            )
        case _:
            return FakeWeatherBackend()


def create_resolver(setting: LazySettings) -> BatchResolver:
    """Create a batch resolver, with its cache and upstream backend, from settings."""
    metrics_client = get_metrics_client()
    return BatchResolver(
        gateway=CacheGateway(cache=_create_cache(setting), metrics_client=metrics_client),
        fetcher=UpstreamFetcher(
            backend=_create_backend(setting),
            metrics_client=metrics_client,
            query_timeout_sec=setting.weather.query_timeout_sec,
        ),
        metrics_client=metrics_client,
        cache_ttl_sec=setting.weather.cache_ttl_sec,
    )
