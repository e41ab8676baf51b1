"""Initialize the weather batch resolver."""

import logging
from timeit import default_timer as timer

from cumulus.config import settings
from cumulus.weather.manager import create_resolver
from cumulus.weather.resolver import BatchResolver

resolvers: dict[str, BatchResolver] = {}

logger = logging.getLogger(__name__)

RESOLVER_NAME = "weather"


def init_resolver() -> None:
    """Initialize the batch resolver shared by all requests.

    This should only be called once at the startup of application.
    """
    start = timer()
    resolvers[RESOLVER_NAME] = create_resolver(settings)
    logger.info(
        "Weather resolver initialization completed",
        extra={
            "backend": settings.weather.backend,
            "cache": settings.weather.cache,
            "elapsed": timer() - start,
        },
    )


async def shutdown_resolver() -> None:
    """Shut down the batch resolver.

    This should only be called once at the shutdown of application.
    """
    start = timer()
    if (resolver := resolvers.pop(RESOLVER_NAME, None)) is not None:
        await resolver.shutdown()
    logger.info("Weather resolver shutdown completed", extra={"elapsed": timer() - start})


def get_resolver() -> BatchResolver:
    """Return the batch resolver. Used as a FastAPI dependency."""
    return resolvers[RESOLVER_NAME]
