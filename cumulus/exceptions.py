"""Cumulus specific exceptions."""


class InvalidBatchError(ValueError):
    """Raised when a batch of locations is rejected before resolution begins."""

    reason: str

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class BackendError(Exception):
    """Error specific to weather backend functions."""


class CacheAdapterError(Exception):
    """Exception raised when a cache adapter operation fails."""

    pass


class CacheEntryError(ValueError):
    """Exception raised for cache entries that can't be deserialized."""

    pass
