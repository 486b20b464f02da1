"""Data models for the identifier store."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Tuple


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class VisitEvent:
    """One resolution (redirect) of a short link."""

    timestamp: datetime

    @property
    def timestamp_ms(self) -> int:
        """Timestamp as integer milliseconds since the Unix epoch."""
        return int(self.timestamp.timestamp() * 1000)


@dataclass(frozen=True)
class ShortLinkRecord:
    """Represents a short link mapping in the store."""

    short_id: str
    redirect_url: str
    created_at: datetime
    visit_history: Tuple[VisitEvent, ...] = field(default_factory=tuple)

    @property
    def total_clicks(self) -> int:
        return len(self.visit_history)

    def with_visit(self, event: VisitEvent) -> "ShortLinkRecord":
        """Return a copy with ``event`` appended to the visit history."""
        return replace(self, visit_history=self.visit_history + (event,))
