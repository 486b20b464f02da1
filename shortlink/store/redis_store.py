"""Redis implementation of the identifier store."""

import logging
from datetime import datetime
from typing import List, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from .base import IdentifierStoreBase, InsertResult
from .helpers import handle_storage_errors
from .models import ShortLinkRecord, VisitEvent, ensure_utc

REDIS_ERRORS = (RedisError, OSError)

# KEYS[1] = link hash, ARGV = redirect_url, created_at
INSERT_LUA = """
if redis.call('EXISTS', KEYS[1]) == 1 then
    return 0
end
redis.call('HSET', KEYS[1], 'redirect_url', ARGV[1], 'created_at', ARGV[2])
return 1
"""

# KEYS[1] = link hash, KEYS[2] = visits list, ARGV[1] = visit timestamp
APPEND_VISIT_LUA = """
if redis.call('EXISTS', KEYS[1]) == 0 then
    return false
end
redis.call('RPUSH', KEYS[2], ARGV[1])
local link = redis.call('HMGET', KEYS[1], 'redirect_url', 'created_at')
return {link[1], link[2], redis.call('LRANGE', KEYS[2], 0, -1)}
"""


class RedisKeySchema:
    """Namespaced key names for short links."""

    def __init__(self, prefix: str = "shortlink"):
        self.prefix = prefix

    def link_key(self, short_id: str) -> str:
        return f"{self.prefix}:link:{short_id}"

    def visits_key(self, short_id: str) -> str:
        return f"{self.prefix}:link:{short_id}:visits"


class RedisIdentifierStore(IdentifierStoreBase):
    """Redis implementation for short link storage.

    Each link is a hash plus a list of visit timestamps. Insert and append
    run as Lua scripts, which Redis executes atomically, so a duplicate
    check can't race an insert and concurrent visits all land in the list
    in arrival order.
    """

    def __init__(
        self,
        storage_url: str,
        key_prefix: str = "shortlink",
        client: Optional[redis.Redis] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis store.

        Args:
            storage_url: Redis connection URL (e.g., redis://localhost:6379/0)
            key_prefix: Namespace for all keys written by this store
            client: Optional pre-built client (used instead of storage_url)
            logger: Optional logger instance
        """
        super().__init__(storage_url)
        self.logger = logger or logging.getLogger(__name__)
        self.keys = RedisKeySchema(key_prefix)
        self.client = client or redis.from_url(
            storage_url,
            encoding="utf-8",
            decode_responses=True,
        )
        self._insert_script = self.client.register_script(INSERT_LUA)
        self._append_visit_script = self.client.register_script(APPEND_VISIT_LUA)

    @handle_storage_errors(*REDIS_ERRORS)
    async def insert(self, record: ShortLinkRecord) -> InsertResult:
        created = await self._insert_script(
            keys=[self.keys.link_key(record.short_id)],
            args=[record.redirect_url, ensure_utc(record.created_at).isoformat()],
        )
        if not int(created):
            self.logger.warning(f"Short ID already exists: {record.short_id}")
            return InsertResult.DUPLICATE_KEY
        return InsertResult.CREATED

    @handle_storage_errors(*REDIS_ERRORS)
    async def find_by_id(self, short_id: str) -> Optional[ShortLinkRecord]:
        async with self.client.pipeline(transaction=True) as pipe:
            pipe.hmget(self.keys.link_key(short_id), "redirect_url", "created_at")
            pipe.lrange(self.keys.visits_key(short_id), 0, -1)
            (redirect_url, created_at), visits = await pipe.execute()

        if redirect_url is None:
            return None
        return self._build_record(short_id, redirect_url, created_at, visits)

    @handle_storage_errors(*REDIS_ERRORS)
    async def append_visit(self, short_id: str, timestamp: datetime) -> Optional[ShortLinkRecord]:
        result = await self._append_visit_script(
            keys=[self.keys.link_key(short_id), self.keys.visits_key(short_id)],
            args=[ensure_utc(timestamp).isoformat()],
        )
        if result is None:
            return None

        redirect_url, created_at, visits = result
        return self._build_record(short_id, redirect_url, created_at, visits)

    @staticmethod
    def _build_record(short_id: str, redirect_url: str, created_at: str, visits: List[str]) -> ShortLinkRecord:
        return ShortLinkRecord(
            short_id=short_id,
            redirect_url=redirect_url,
            created_at=ensure_utc(datetime.fromisoformat(created_at)),
            visit_history=tuple(
                VisitEvent(timestamp=ensure_utc(datetime.fromisoformat(ts))) for ts in visits
            ),
        )

    async def health_check(self) -> bool:
        try:
            await self.client.ping()
            return True
        except REDIS_ERRORS as e:
            self.logger.error(f"Health check failed: {e}")
            return False

    async def close(self) -> None:
        """Close Redis connection."""
        await self.client.aclose()
        self.logger.info("Redis connection closed")
