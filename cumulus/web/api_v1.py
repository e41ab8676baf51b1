"""Cumulus V1 API"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import ORJSONResponse

from cumulus.exceptions import InvalidBatchError
from cumulus.web.auth import require_api_key
from cumulus.web.models_v1 import ErrorResponse, WeatherRequest, WeatherResponse
from cumulus.weather import get_resolver
from cumulus.weather.resolver import BatchResolver

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(require_api_key)])


@router.post(
    "/weather",
    tags=["weather"],
    summary="Batch weather lookup",
    response_model=WeatherResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
    },
)
async def weather(
    body: WeatherRequest,
    resolver: BatchResolver = Depends(get_resolver),
) -> ORJSONResponse:
    """Get the current weather for up to 10 locations.

    **Body:**

    - `locations`: An array of 1 to 10 city names or zip codes.

    **Response:**

    An array with one element per requested location, in request order. Each element
    is either a weather report (`location`, `temperature`, `description`,
    `humidity`, `windSpeed`, `source`) or, when that location couldn't be resolved,
    `{"location": ..., "error": ...}`. A failure for one location never affects the
    others.

    Reports are served from a shared cache when available and fetched from the
    upstream provider otherwise.
    """
    try:
        outcomes = await resolver.resolve_batch(body.locations)
    except InvalidBatchError as exc:
        logger.info(f"HTTP 400: invalid batch: {exc.reason}")
        return ORJSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": exc.reason},
        )

    return ORJSONResponse(content=[outcome.to_dict() for outcome in outcomes])
