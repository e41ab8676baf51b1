"""Test backend for the weather resolver."""

from cumulus.weather.backends.errors import LocationNotFoundError
from cumulus.weather.backends.protocol import WeatherSnapshot


class FakeWeatherBackend:
    """A fake backend for local development and CI. It reports the same mild weather
    for every location, except for blank ones which it doesn't know about.
    """

    async def get_snapshot(self, location: str) -> WeatherSnapshot:
        """Return a canned snapshot for the location."""
        if not location.strip():
            raise LocationNotFoundError(location)
        return WeatherSnapshot(
            location=location,
            temperature="18.0°C",
            description="Partially cloudy",
            humidity="60.0%",
            wind_speed="10.0 km/h",
            source="Fake weather backend",
        )

    async def shutdown(self) -> None:
        """Fake Backend does not need to clean up
        any open connections.
        """
        pass
