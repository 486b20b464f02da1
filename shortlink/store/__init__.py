"""Identifier store layer for the short link service."""

import logging
from typing import Optional
from urllib.parse import urlparse

from .base import IdentifierStoreBase, InsertResult
from .memory import MemoryIdentifierStore
from .models import ShortLinkRecord, VisitEvent

__all__ = [
    "IdentifierStoreBase",
    "InsertResult",
    "MemoryIdentifierStore",
    "ShortLinkRecord",
    "VisitEvent",
    "create_store",
]


def create_store(
    storage_url: str,
    pool_max_size: int = 10,
    create_tables: bool = False,
    logger: Optional[logging.Logger] = None,
) -> IdentifierStoreBase:
    """Build a store from a connection string.

    Supported schemes: ``memory://``, ``postgresql://`` / ``postgres://``,
    ``redis://`` / ``rediss://``.

    Raises:
        ValueError: If the scheme is not supported
    """
    scheme = urlparse(storage_url).scheme.lower()

    if scheme == "memory":
        return MemoryIdentifierStore(storage_url, logger=logger)

    if scheme in ("postgresql", "postgres"):
        from .postgres import PostgresIdentifierStore

        return PostgresIdentifierStore(
            storage_url,
            pool_max_size=pool_max_size,
            create_tables=create_tables,
            logger=logger,
        )

    if scheme in ("redis", "rediss"):
        from .redis_store import RedisIdentifierStore

        return RedisIdentifierStore(storage_url, logger=logger)

    raise ValueError(f"Unsupported storage URL scheme: '{scheme}'")
