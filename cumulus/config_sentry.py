"""Sentry Configuration"""

import logging

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration
from sentry_sdk.types import Event, Hint

from cumulus.config import settings
from cumulus.utils.version import fetch_app_version_from_file

logger = logging.getLogger(__name__)

REDACTED_TEXT = "[REDACTED]"

# Headers that must never leave the service.
SENSITIVE_HEADERS = frozenset({"x-api-key", "authorization", "cookie"})


def configure_sentry() -> None:  # pragma: no cover
    """Configure and initialize Sentry integration."""
    if settings.sentry.mode == "disabled":
        return
    # This is the SHA-1 hash of the HEAD of the current branch stored in version.json file.
    version_sha = fetch_app_version_from_file().commit
    sentry_sdk.init(
        dsn=settings.sentry.dsn,
        integrations=[
            StarletteIntegration(),
            FastApiIntegration(),
        ],
        release=version_sha,
        debug="debug" == settings.sentry.mode,
        before_send=strip_sensitive_data,
        environment=settings.sentry.env,
        traces_sample_rate=settings.sentry.traces_sample_rate,
    )


def strip_sensitive_data(event: Event, hint: Hint) -> Event | None:
    """Filter out API keys and requested locations from Sentry events."""
    #  See: https://docs.sentry.io/platforms/python/configuration/filtering/
    request = event.get("request", {})
    if request.get("data"):
        request["data"] = REDACTED_TEXT
    if request.get("query_string"):
        request["query_string"] = REDACTED_TEXT
    headers = request.get("headers", {})
    for name in list(headers):
        if name.lower() in SENSITIVE_HEADERS:
            headers[name] = REDACTED_TEXT

    try:
        for entry in event["exception"]["values"][0]["stacktrace"]["frames"]:
            for key in ("locations", "location", "candidate", "api_key"):
                if entry["vars"].get(key):
                    entry["vars"][key] = REDACTED_TEXT
    except (KeyError, IndexError) as e:
        logger.warning(
            f"Encountered KeyError or IndexError for value {e} while filtering Sentry data."
        )

    return event
