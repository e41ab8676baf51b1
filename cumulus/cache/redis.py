"""Redis cache adapter."""

from datetime import timedelta

from redis.asyncio import Redis, RedisError

from cumulus.exceptions import CacheAdapterError


def create_redis_client(
    server: str,
    max_connections: int,
    socket_connect_timeout: int,
    socket_timeout: int,
    db: int = 0,
) -> Redis:
    """Create a Redis client backed by a connection pool shared by all in-flight requests.

    Args:
        - `server`: the URL to the Redis endpoint.
        - `max_connections`: the maximum connections allowed in the connection pool.
        - `socket_connect_timeout`: the timeout in seconds to connect to the Redis server.
        - `socket_timeout`: the timeout in seconds to interact with the Redis server.
        - `db`: the ID (`SELECT db`) of the DB to which the client connects.
    Returns:
        - A Redis client. Dropped connections are re-established by the pool on the next
          command.
    """
    return Redis.from_url(
        server,
        db=db,
        max_connections=max_connections,
        socket_connect_timeout=socket_connect_timeout,
        socket_timeout=socket_timeout,
    )


class RedisAdapter:
    """A cache adapter that stores key-value pairs in Redis.

    The adapter wraps every Redis failure in a `CacheAdapterError` so that callers
    never need to know about `redis-py` exception types.
    """

    client: Redis

    def __init__(self, client: Redis):
        self.client = client

    async def get(self, key: str) -> bytes | None:
        """Get the value associated with the key from Redis. Returns `None` if the key isn't in
        Redis.

        Raises:
            - `CacheAdapterError` if Redis returns an error.
        """
        try:
            return await self.client.get(key)
        except RedisError as exc:
            raise CacheAdapterError(f"Failed to get `{repr(key)}` with error: `{exc}`") from exc

    async def set(
        self,
        key: str,
        value: bytes,
        ttl: timedelta | None = None,
    ) -> None:
        """Store a key-value pair in Redis, overwriting the previous value if set, and optionally
        expiring after the time-to-live.

        Raises:
            - `CacheAdapterError` if Redis returns an error.
        """
        try:
            await self.client.set(key, value, ex=int(ttl.total_seconds()) if ttl else None)
        except RedisError as exc:
            raise CacheAdapterError(f"Failed to set `{repr(key)}` with error: `{exc}`") from exc

    async def close(self) -> None:
        """Close the Redis connection."""
        # "type: ignore" was added to suppress a false alarm.
        await self.client.aclose()  # type: ignore
