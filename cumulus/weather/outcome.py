"""Per-location outcomes of a batch resolution."""

from dataclasses import dataclass
from typing import Any, TypeAlias

from cumulus.weather.backends.protocol import WeatherSnapshot


@dataclass(frozen=True)
class Success:
    """A location resolved to a weather snapshot, from the cache or from upstream."""

    snapshot: WeatherSnapshot

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form of this outcome."""
        return self.snapshot.model_dump(by_alias=True)


@dataclass(frozen=True)
class Failure:
    """A location that could not be resolved, with the reason reported to the caller."""

    location: str
    error: str

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form of this outcome."""
        return {"location": self.location, "error": self.error}


Outcome: TypeAlias = Success | Failure
