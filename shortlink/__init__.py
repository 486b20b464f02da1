"""Core business logic for the short link service."""

from .errors import GenerationExhausted, NotFound, ShortLinkError, StorageError, ValidationError
from .idgen import ShortIdGenerator
from .service import Analytics, RedirectService

__all__ = [
    "Analytics",
    "GenerationExhausted",
    "NotFound",
    "RedirectService",
    "ShortIdGenerator",
    "ShortLinkError",
    "StorageError",
    "ValidationError",
]
