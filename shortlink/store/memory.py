"""In-memory identifier store."""

import asyncio
import logging
from datetime import datetime
from typing import Dict, Optional

from .base import IdentifierStoreBase, InsertResult
from .models import ShortLinkRecord, VisitEvent, ensure_utc


class MemoryIdentifierStore(IdentifierStoreBase):
    """Process-local store backed by a dict.

    Visit appends take a per-ID lock so the read-modify-write on a record
    is serialized per short ID. Records are immutable dataclasses, so
    callers never share mutable state with the store.
    """

    def __init__(self, storage_url: str = "memory://", logger: Optional[logging.Logger] = None):
        super().__init__(storage_url)
        self.logger = logger or logging.getLogger(__name__)
        self._records: Dict[str, ShortLinkRecord] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def _lock_for(self, short_id: str) -> asyncio.Lock:
        return self._locks.setdefault(short_id, asyncio.Lock())

    async def insert(self, record: ShortLinkRecord) -> InsertResult:
        async with self._lock_for(record.short_id):
            if record.short_id in self._records:
                self.logger.warning(f"Short ID already exists: {record.short_id}")
                return InsertResult.DUPLICATE_KEY
            self._records[record.short_id] = record
        self.logger.debug(f"Stored short ID {record.short_id}")
        return InsertResult.CREATED

    async def find_by_id(self, short_id: str) -> Optional[ShortLinkRecord]:
        return self._records.get(short_id)

    async def append_visit(self, short_id: str, timestamp: datetime) -> Optional[ShortLinkRecord]:
        if short_id not in self._records:
            return None
        async with self._lock_for(short_id):
            record = self._records.get(short_id)
            if record is None:
                return None
            updated = record.with_visit(VisitEvent(timestamp=ensure_utc(timestamp)))
            self._records[short_id] = updated
        return updated

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self.logger.debug(f"Closing in-memory store with {len(self._records)} records")

    def __len__(self) -> int:
        return len(self._records)
