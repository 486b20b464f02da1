"""Client-side list of recently created short links."""

import json
import logging
import os
from collections import deque
from dataclasses import asdict, dataclass
from typing import Deque, Iterable, List, Optional

MAX_RECENT_LINKS = 10


@dataclass(frozen=True)
class RecentLink:
    """A short link the local user created."""

    short_id: str
    original_url: str
    short_url: str
    created_at: int  # milliseconds since epoch


class RecentLinks:
    """Fixed-size, newest-first history of the user's own short links.

    This is local client state only; the service never sees it. When the
    list is full, adding a link evicts the oldest one.
    """

    def __init__(
        self,
        path: Optional[str] = None,
        max_entries: int = MAX_RECENT_LINKS,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the history.

        Args:
            path: Optional JSON file the history is loaded from and saved to
            max_entries: Maximum number of links kept
            logger: Optional logger
        """
        self.path = path
        self.max_entries = max_entries
        self.logger = logger or logging.getLogger(__name__)
        self._links: Deque[RecentLink] = deque(maxlen=max_entries)

        if path and os.path.exists(path):
            self._load()

    def add(self, link: RecentLink) -> None:
        """Add a link to the front, evicting the oldest if full."""
        self._links.appendleft(link)
        self._save()

    def clear(self) -> None:
        self._links.clear()
        self._save()

    def __iter__(self):
        return iter(self._links)

    def __len__(self) -> int:
        return len(self._links)

    def to_list(self) -> List[dict]:
        return [asdict(link) for link in self._links]

    def _extend(self, links: Iterable[RecentLink]) -> None:
        for link in links:
            if len(self._links) >= self.max_entries:
                break
            self._links.append(link)

    def _load(self) -> None:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._extend(RecentLink(**item) for item in data)
        except (OSError, ValueError, TypeError) as e:
            # A corrupt history file just starts a fresh history.
            self.logger.warning(f"Ignoring unreadable recent links file {self.path}: {e}")
            self._links.clear()

    def _save(self) -> None:
        if not self.path:
            return
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self.to_list(), f, indent=2)
