"""Abstract base class for identifier store implementations."""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Optional

from .models import ShortLinkRecord


class InsertResult(Enum):
    """Outcome of an insert attempt."""

    CREATED = "created"
    DUPLICATE_KEY = "duplicate_key"


class IdentifierStoreBase(ABC):
    """Abstract base class for short link storage.

    Implementations must keep ``short_id`` unique and must append visits
    atomically: concurrent ``append_visit`` calls on one ID each add
    exactly one event.
    """

    def __init__(self, storage_url: str):
        """Initialize store.

        Args:
            storage_url: Storage connection string
        """
        self.storage_url = storage_url

    @abstractmethod
    async def insert(self, record: ShortLinkRecord) -> InsertResult:
        """Store a new record.

        Args:
            record: The record to store

        Returns:
            InsertResult.CREATED, or InsertResult.DUPLICATE_KEY if the
            short ID is already taken (the stored record is left untouched)
        """
        pass

    @abstractmethod
    async def find_by_id(self, short_id: str) -> Optional[ShortLinkRecord]:
        """Get a record by short ID.

        Args:
            short_id: The short ID to lookup

        Returns:
            The record if found, None otherwise
        """
        pass

    @abstractmethod
    async def append_visit(self, short_id: str, timestamp: datetime) -> Optional[ShortLinkRecord]:
        """Atomically append one visit event to a record.

        Args:
            short_id: The short ID that was visited
            timestamp: When the visit occurred

        Returns:
            The updated record, or None if no such record exists
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release connections held by the store."""
        pass
