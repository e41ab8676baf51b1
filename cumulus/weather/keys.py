"""Cache keys for weather snapshots."""

import re

# Keeps weather entries apart from any other user of the shared cache.
CACHE_KEY_PREFIX: str = "weather_"

_WHITESPACE_RUN = re.compile(r"\s+")


def cache_key_for_location(location: str) -> str:
    """Return the cache key for a raw location.

    Locations that differ only by case or by the amount of whitespace share a key,
    e.g. "New York" and "new   york" both map to `weather_new_york`.
    """
    return CACHE_KEY_PREFIX + _WHITESPACE_RUN.sub("_", location.lower())
