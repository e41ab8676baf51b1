"""No-operation adapter that disables caching."""

from datetime import timedelta


class NoCacheAdapter:
    """A cache adapter that doesn't store or return anything."""

    async def get(self, key: str) -> bytes | None:  # noqa: D102
        return None

    async def set(  # noqa: D102
        self,
        key: str,
        value: bytes,
        ttl: timedelta | None = None,
    ) -> None:
        pass

    async def close(self) -> None:  # noqa: D102
        pass
