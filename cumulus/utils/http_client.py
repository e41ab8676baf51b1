"""A helper to create asynchronous HTTP client (via `httpx.AsyncClient`)
with common configurations.
"""

from httpx import AsyncClient, Limits, Timeout

USER_AGENT = "cumulus/0.1"


def create_http_client(
    base_url: str = "",
    max_connections: int = 128,
    connect_timeout: float = 1.0,
    request_timeout: float = 5.0,
    pool_timeout: float = 1.0,
) -> AsyncClient:
    """Create a new `httpx.AsyncClient` with common configurations.

    Args:
      - `base_url` {str}: The base URL for this client. An empty string sets no base URL.
      - `max_connections` {int}: Max connections of the connection pool, shared by all
        concurrent upstream lookups.
      - `connect_timeout` {float}: The timeout for establishing a connection to the host.
      - `request_timeout` {float}: The timeout for handling a request to the host.
      - `pool_timeout` {float}: The timeout for acquiring a connection from the pool.
    Returns:
      - {AsyncClient}: An async HTTP client.
    """
    return AsyncClient(
        base_url=base_url,
        headers={"User-Agent": USER_AGENT},
        limits=Limits(max_connections=max_connections),
        timeout=Timeout(request_timeout, connect=connect_timeout, pool=pool_timeout),
    )
