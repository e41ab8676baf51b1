"""Validation of inbound location batches."""

from typing import Any

from cumulus.config import settings
from cumulus.exceptions import InvalidBatchError

MAX_BATCH_SIZE: int = settings.web.api.v1.max_locations

INVALID_BATCH_MESSAGE: str = (
    f"Please provide an array of 1 to {MAX_BATCH_SIZE} locations (city names or zip codes)"
    ' in the request body under the "locations" key.'
)


def validate_batch(candidate: Any) -> list[str]:
    """Validate a candidate batch and return its locations.

    The whole batch is accepted or rejected at once: nothing is returned for a batch
    with even one bad element.

    Raises:
        InvalidBatchError: if the batch is not a list of 1 to `MAX_BATCH_SIZE`
        non-empty location strings.
    """
    if not isinstance(candidate, (list, tuple)):
        raise InvalidBatchError(INVALID_BATCH_MESSAGE)
    if not 1 <= len(candidate) <= MAX_BATCH_SIZE:
        raise InvalidBatchError(INVALID_BATCH_MESSAGE)

    locations: list[str] = []
    for index, item in enumerate(candidate):
        if not isinstance(item, str):
            raise InvalidBatchError(f"Location at index {index} must be a string.")
        if not item.strip():
            raise InvalidBatchError(f"Location at index {index} must not be empty.")
        locations.append(item)

    return locations
