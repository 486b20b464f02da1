"""Exceptions raised by the short link service.

Classes:
    ShortLinkError:
        Base class for all service exceptions.
    ValidationError:
        Malformed or missing input (e.g. empty URL on creation).
    NotFound:
        A short ID does not resolve to any record.
    GenerationExhausted:
        No free short ID was found within the retry bound.
    StorageError:
        The underlying store failed (connection loss, timeout, driver error).

A duplicate short ID on insert is not an exception: stores report it as
``InsertResult.DUPLICATE_KEY`` and the service regenerates.
"""


class ShortLinkError(Exception):
    """Base class for short link service exceptions."""
    pass


class ValidationError(ShortLinkError):
    """Raised when request input is missing or malformed."""
    pass


class NotFound(ShortLinkError):
    """Raised when a short ID is unknown."""

    def __init__(self, short_id: str):
        super().__init__(f"Short ID '{short_id}' not found")
        self.short_id = short_id


class GenerationExhausted(ShortLinkError):
    """Raised when every generated short ID collided with an existing one."""

    def __init__(self, attempts: int):
        super().__init__(f"Unable to allocate a unique short ID after {attempts} attempts")
        self.attempts = attempts


class StorageError(ShortLinkError):
    """Raised when the store cannot be reached or a storage call fails."""
    pass
