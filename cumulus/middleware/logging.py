"""The middleware that records access logs for Cumulus."""

import logging
import time

from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger("request.summary")


class LoggingMiddleware:
    """An ASGI middleware for logging."""

    def __init__(self, app: ASGIApp) -> None:
        """Initialize the middleware and store the ASGI app instance."""
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        """Log one summary line per HTTP request."""
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start: float = time.perf_counter()

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                logger.info(
                    "",
                    extra={
                        "agent": _header(scope, b"user-agent"),
                        "path": scope["path"],
                        "method": scope["method"],
                        "code": message["status"],
                        "t": int((time.perf_counter() - start) * 1000),
                    },
                )
            await send(message)

        await self.app(scope, receive, send_wrapper)
        return


def _header(scope: Scope, name: bytes) -> str:
    for key, value in scope.get("headers", []):
        if key == name:
            return value.decode("latin-1")
    return ""
