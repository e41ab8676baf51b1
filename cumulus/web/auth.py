"""API key authentication for the v1 API."""

import logging
import secrets

from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from cumulus.config import settings

logger = logging.getLogger(__name__)

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def require_api_key(provided_api_key: str | None = Security(api_key_header)) -> None:
    """Reject requests without the configured API key. An empty `web.api_key` setting
    disables the check.

    Raises:
        HTTPException: 401 if the key is missing, 403 if it is wrong.
    """
    expected_api_key: str = settings.web.api_key
    if not expected_api_key:
        return

    if not provided_api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: API key is missing.",
        )

    if not secrets.compare_digest(provided_api_key, expected_api_key):
        logger.warning("Rejected request with an invalid API key")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: Invalid API key.",
        )


def check_api_key_configured() -> None:
    """Refuse to start in production without an API key, as an empty key disables
    authentication.
    """
    if settings.current_env.lower() == "production" and not settings.web.api_key:
        raise ValueError("An API key (`web.api_key`) must be configured in production")
