"""Protocol for weather backends."""

from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cumulus.exceptions import CacheEntryError


class WeatherSnapshot(BaseModel):
    """Model for the current weather conditions at a location.

    Snapshots are stored in the cache in their JSON form, so any change to the field
    names here invalidates cached entries (they are then treated as cache misses).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    location: str
    temperature: str
    description: str
    humidity: str
    wind_speed: str = Field(alias="windSpeed")
    source: str

    def to_cache_value(self) -> bytes:
        """Serialize the snapshot for storage in the cache."""
        return self.model_dump_json(by_alias=True).encode("utf-8")

    @classmethod
    def from_cache_value(cls, data: bytes) -> "WeatherSnapshot":
        """Deserialize a snapshot read from the cache.

        Raises:
            CacheEntryError: if the cached value is not a valid snapshot.
        """
        try:
            return cls.model_validate_json(data)
        except ValidationError as exc:
            raise CacheEntryError(
                f"Invalid cached weather snapshot: {exc.error_count()} errors"
            ) from exc


class WeatherBackend(Protocol):
    """Protocol for a weather backend that the upstream fetcher depends on.

    Note: This only defines the methods used by the fetcher. The actual backend
    might define additional methods and attributes which the fetcher doesn't
    directly depend on.
    """

    async def get_snapshot(self, location: str) -> WeatherSnapshot:  # pragma: no cover
        """Get the current weather for a free-text location (city name or zip code).

        Raises:
            BackendError: Category of error specific to weather backends.
        """
        ...

    async def shutdown(self) -> None:  # pragma: no cover
        """Close down any open connections."""
        ...
