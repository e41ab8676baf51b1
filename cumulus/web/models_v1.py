"""Models for the v1 weather API."""

from typing import Any

from pydantic import BaseModel, Field

from cumulus.weather.backends.protocol import WeatherSnapshot


class WeatherRequest(BaseModel):
    """Body of a batch weather request.

    `locations` is kept loosely typed here so that cardinality and element checks
    happen in one place, the batch validator, with its own error messages.
    """

    locations: Any = Field(
        description="1 to 10 city names or zip codes.",
        examples=[["London", "10001"]],
    )


class LocationError(BaseModel):
    """A location that could not be resolved."""

    location: str
    error: str


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    message: str


WeatherResponse = list[WeatherSnapshot | LocationError]
