"""Business logic service for short links."""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from .common.validators import is_valid_url
from .errors import GenerationExhausted, NotFound, ValidationError
from .idgen import ShortIdGenerator
from .store.base import IdentifierStoreBase, InsertResult
from .store.models import ShortLinkRecord, VisitEvent, utc_now


class AllocationStatus(Enum):
    ALLOCATED = "allocated"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class Allocation:
    """Result of the bounded short ID allocation loop."""

    status: AllocationStatus
    attempts: int
    short_id: Optional[str] = None


@dataclass(frozen=True)
class Analytics:
    """Visit analytics for one short link."""

    total_clicks: int
    analytics: Tuple[VisitEvent, ...]


class RedirectService:
    """Service layer for creating, resolving and reporting on short links."""

    def __init__(
        self,
        store: IdentifierStoreBase,
        id_generator: Optional[ShortIdGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_generation_attempts: int = 5,
        require_http_scheme: bool = False,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize redirect service.

        Args:
            store: Identifier store instance
            id_generator: Optional short ID generator
            logger: Optional logger
            max_generation_attempts: Insert attempts before giving up on a create
            require_http_scheme: Only accept absolute http(s) URLs
            clock: Source of visit and creation timestamps
        """
        if max_generation_attempts < 1:
            raise ValueError("max_generation_attempts must be at least 1")

        self.store = store
        self.generator = id_generator or ShortIdGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_generation_attempts = max_generation_attempts
        self.require_http_scheme = require_http_scheme
        self.clock = clock

    async def create(self, long_url: str) -> str:
        """Create a new short link.

        Args:
            long_url: The URL visitors will be redirected to

        Returns:
            The newly assigned short ID

        Raises:
            ValidationError: If the URL is empty or rejected by the scheme policy
            GenerationExhausted: If every candidate ID collided
        """
        is_valid, error = is_valid_url(long_url, require_http_scheme=self.require_http_scheme)
        if not is_valid:
            raise ValidationError(error)

        allocation = await self._allocate(long_url)
        if allocation.status is AllocationStatus.EXHAUSTED:
            self.logger.error(
                f"Short ID generation exhausted after {allocation.attempts} attempts "
                f"(keyspace {self.generator.keyspace_size})"
            )
            raise GenerationExhausted(allocation.attempts)

        self.logger.info(f"Created short link: {allocation.short_id} -> {long_url}")
        return allocation.short_id

    async def _allocate(self, long_url: str) -> Allocation:
        """Insert a new record under a fresh random ID, retrying on collision."""
        for attempt in range(1, self.max_generation_attempts + 1):
            short_id = self.generator.generate()
            record = ShortLinkRecord(
                short_id=short_id,
                redirect_url=long_url,
                created_at=self.clock(),
            )
            result = await self.store.insert(record)
            if result is InsertResult.CREATED:
                if attempt > 1:
                    self.logger.debug(f"Allocated {short_id} after {attempt} attempts")
                return Allocation(AllocationStatus.ALLOCATED, attempt, short_id)

            self.logger.warning(f"Short ID collision on attempt {attempt}: {short_id}")

        return Allocation(AllocationStatus.EXHAUSTED, self.max_generation_attempts)

    async def resolve(self, short_id: str) -> str:
        """Record a visit and return the redirect target.

        Args:
            short_id: The short ID from the request path

        Returns:
            The original URL

        Raises:
            NotFound: If the short ID is unknown
        """
        self._check_short_id(short_id)
        record = await self.store.append_visit(short_id, self.clock())
        if record is None:
            self.logger.warning(f"Short ID not found: {short_id}")
            raise NotFound(short_id)

        self.logger.debug(f"Resolved {short_id} -> {record.redirect_url} (visit {record.total_clicks})")
        return record.redirect_url

    async def get_analytics(self, short_id: str) -> Analytics:
        """Get the visit history for a short link, oldest first.

        Raises:
            NotFound: If the short ID is unknown
        """
        record = await self.get_link(short_id)
        return Analytics(total_clicks=record.total_clicks, analytics=record.visit_history)

    async def get_link(self, short_id: str) -> ShortLinkRecord:
        """Look up a short link without recording a visit.

        Raises:
            NotFound: If the short ID is unknown
        """
        self._check_short_id(short_id)
        record = await self.store.find_by_id(short_id)
        if record is None:
            raise NotFound(short_id)
        return record

    def _check_short_id(self, short_id: str) -> None:
        """Reject path segments that could never be a generated ID."""
        if not self.generator.is_valid_format(short_id):
            self.logger.debug(f"Rejected malformed short ID ({len(short_id)} chars)")
            raise NotFound(short_id)

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        storage_healthy = await self.store.health_check()
        return {
            "storage": storage_healthy,
            "overall": storage_healthy,
        }

    async def close(self) -> None:
        """Close store connections."""
        await self.store.close()
