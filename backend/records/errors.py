from __future__ import annotations


class FaunaError(Exception):
    """
    Base class for errors raised by the record stores.

    The HTTP layer maps each subclass to its own status code, so callers should
    always raise one of the concrete kinds below.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FaunaError, ValueError):
    """
    Malformed or missing input: required fields, coordinate strings, polygons.

    Also a ValueError so it can be raised from inside pydantic validators.
    """


class NotFoundError(FaunaError):
    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} not found")
        self.kind = kind
        self.record_id = record_id


class StorageError(FaunaError):
    """The backing store failed for infrastructure reasons."""
