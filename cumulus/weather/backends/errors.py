"""Errors module that maintains the upstream error strings and the BackendError
subclasses that carry them.
"""

from enum import Enum

from cumulus.exceptions import BackendError


class WeatherErrorMessages(Enum):
    """Enum variables with string values representing error messages"""

    LOCATION_NOT_FOUND = "Location not found or invalid: {location}"
    HTTP_UNEXPECTED_STATUS = "API error for {location}: Status {status_code}"
    NO_CURRENT_CONDITIONS = "No current weather conditions found for {location}"
    FETCH_FAILED = "Failed to fetch weather data for {location} from external API"

    def format_message(self, **kwargs) -> str:
        """Format the enum string value with the passed in keyword arguments"""
        return self.value.format(**kwargs)


class WeatherBackendError(BackendError):
    """Base class for the upstream error taxonomy. The message is what the caller sees
    for the failed location.
    """

    def __init__(self, error_type: WeatherErrorMessages, **kwargs):
        super().__init__(error_type.format_message(**kwargs))


class LocationNotFoundError(WeatherBackendError):
    """The provider does not recognize the location."""

    def __init__(self, location: str):
        super().__init__(WeatherErrorMessages.LOCATION_NOT_FOUND, location=location)


class UpstreamError(WeatherBackendError):
    """The provider answered with an unexpected status or payload."""


class NetworkError(WeatherBackendError):
    """The provider could not be reached or the call did not complete in time."""

    def __init__(self, location: str):
        super().__init__(WeatherErrorMessages.FETCH_FAILED, location=location)
