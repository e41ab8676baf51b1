"""App startup point"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cumulus import weather
from cumulus.config_logging import configure_logging
from cumulus.config_sentry import configure_sentry
from cumulus.metrics import configure_metrics, get_metrics_client
from cumulus.middleware.logging import LoggingMiddleware
from cumulus.weather.validator import INVALID_BATCH_MESSAGE
from cumulus.web import api_v1, dockerflow
from cumulus.web.auth import check_api_key_configured

tags_metadata = [
    {
        "name": "weather",
        "description": "Batch weather lookups for up to 10 locations.",
    },
]

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Set up various configurations at startup and handle shutdown clean up.
    See lifespan events in fastAPI docs https://fastapi.tiangolo.com/advanced/events/
    """
    # Setup methods run before `yield` and cleanup methods after.
    configure_logging()
    check_api_key_configured()
    configure_sentry()
    await configure_metrics()
    weather.init_resolver()
    yield
    await weather.shutdown_resolver()
    await get_metrics_client().close()


app = FastAPI(openapi_tags=tags_metadata, lifespan=lifespan, default_response_class=ORJSONResponse)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> ORJSONResponse:
    """Use HTTP status code: 400 for all invalid requests."""
    # `exc.errors()` is intentionally omitted in the log, it echoes the request body.
    logger.warning(f"HTTP 400: request validation error for path: {request.url.path}")
    return ORJSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": INVALID_BATCH_MESSAGE},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> ORJSONResponse:
    """Render HTTP errors with the same `{"message": ...}` body as the other errors."""
    return ORJSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=exc.headers,
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """Report an internal error without any partial result."""
    logger.error(f"Error processing request for path: {request.url.path}", exc_info=exc)
    return ORJSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


app.add_middleware(LoggingMiddleware)

app.include_router(dockerflow.router)
app.include_router(api_v1.router, prefix="/api/v1")


if __name__ == "__main__":  # pragma: no cover
    """This is used only for local runs.

    Start the server:
        $ python -m cumulus.main
    """
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, proxy_headers=True)
