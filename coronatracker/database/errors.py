"""Exceptions raised by the storage layer."""


class StoreError(Exception):
    """Base error for country storage operations."""


class StoreClosedError(StoreError):
    """Work was submitted after the database was closed."""


class RecordNotFoundError(StoreError):
    """Update or delete targeted a country code that is not stored."""

    def __init__(self, code: str):
        super().__init__(f"No country stored with code {code!r}")
        self.code = code
